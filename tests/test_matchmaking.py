from flapduel.services.matchmaking import Matchmaker, WaitingQueue


def test_queue_keeps_arrival_order_and_rejects_duplicates():
    queue = WaitingQueue()
    assert queue.push('a')
    assert queue.push('b')
    assert not queue.push('a')
    assert queue.snapshot() == ['a', 'b']
    assert queue.pop_oldest() == 'a'
    assert queue.pop_oldest() == 'b'
    assert queue.pop_oldest() is None


def test_discard_only_removes_that_entry():
    queue = WaitingQueue()
    for sid in ('a', 'b', 'c'):
        queue.push(sid)
    assert queue.discard('b')
    assert not queue.discard('b')
    assert queue.snapshot() == ['a', 'c']


def test_pairs_are_fifo_and_leave_the_odd_one_waiting():
    matchmaker = Matchmaker()
    for sid in ('A', 'B', 'C', 'D', 'E'):
        matchmaker.enqueue(sid)
    assert list(matchmaker.pairs()) == [('A', 'B'), ('C', 'D')]
    assert matchmaker.queue.snapshot() == ['E']
    assert list(matchmaker.pairs()) == []


def test_each_pass_shrinks_queue_by_two():
    matchmaker = Matchmaker()
    for sid in ('A', 'B', 'C', 'D'):
        matchmaker.enqueue(sid)
    sizes = []
    for _ in matchmaker.pairs():
        sizes.append(len(matchmaker.queue))
    assert sizes == [2, 0]
