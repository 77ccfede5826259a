def test_health(client):
    res = client.get('/health')
    assert res.status_code == 200
    assert res.get_data(as_text=True) == 'OK'


def test_stats_reflect_queue_and_sessions(flask_app, client):
    coordinator = flask_app.extensions['flapduel']
    assert client.get('/stats').get_json() == {'waiting': 0, 'sessions': []}

    coordinator.enqueue('nobody')
    data = client.get('/stats').get_json()
    assert data['waiting'] == 1
    assert data['sessions'] == []
