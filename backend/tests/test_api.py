def test_index(client):
    res = client.get('/')
    assert res.status_code == 200
    assert 'message' in res.get_json()


def test_health(client):
    res = client.get('/health')
    assert res.status_code == 200
    assert res.get_json() == {'status': 'ok'}


def test_match_state_starts_in_lobby(client):
    res = client.get('/api/match/state')
    assert res.status_code == 200
    state = res.get_json()
    assert state['phase'] == 'lobby'
    assert state['player_count'] == 0
    assert state['winner'] is None
    assert state['scores'] == [0, 0]
    assert len(state['paddles']) == 2


def test_match_settings_follow_config(client):
    res = client.get('/api/match/settings')
    assert res.status_code == 200
    data = res.get_json()
    assert data['winning_score'] == 3
    assert data['board_width'] == 800
    assert data['paddle_planes'] == [30, 770]


def test_match_state_tracks_connections(flask_app, client, scheduler):
    match = flask_app.extensions['pong']['match']
    match.connect('http-a')
    scheduler.run_once(0.0)
    state = client.get('/api/match/state').get_json()
    assert state['player_count'] == 1
    assert state['paddles'][0]['occupied'] is True


def test_match_settings_cli(flask_app):
    runner = flask_app.test_cli_runner()
    result = runner.invoke(args=['match-settings'])
    assert result.exit_code == 0
    assert '"winning_score": 3' in result.output
