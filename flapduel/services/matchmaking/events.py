"""Socket.IO event names exchanged with game clients."""

# Inbound
CONNECT = 'connect'
DISCONNECT = 'disconnect'
READY = 'ready'
FLAP = 'flap'
POSITION = 'position'
ABILITY_USE = 'ability-use'
DEATH = 'death'

# Outbound
SEARCHING = 'searching'
MATCHED = 'matched'
STARTED = 'started'
PLAYER_ASSIGNMENT = 'player-assignment'
OPPONENT_FLAP = 'opponent-flap'
OPPONENT_POSITION = 'opponent-position'
OPPONENT_ABILITY = 'opponent-ability'
GAME_OVER = 'game-over'
OPPONENT_DISCONNECTED = 'opponent-disconnected'

# Gameplay events forwarded verbatim to the opponent
RELAYED = {
    FLAP: OPPONENT_FLAP,
    POSITION: OPPONENT_POSITION,
    ABILITY_USE: OPPONENT_ABILITY,
}
