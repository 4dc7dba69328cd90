import logging

from flask import Flask, request, jsonify
from flask_cors import CORS

from config import DEFAULT_USERNAME, MAX_SIMULATED_PLAYS, PLAY_COST, STARTING_BALANCE
from game_logic import PAYTABLE, PROBABILITIES, SYMBOLS, SlotError, play, score, score_many
from logging_config import setup_logging
from models import init_db, SessionLocal, Player, PlayHistory
from payout_rate import expected_payout_rate, simulate_payout_rate
from provably_fair import generate_server_seed, verify_server_seed

setup_logging()
logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app)
init_db()

# Cria jogador padrão em primeiro run
with SessionLocal() as db:
    player = db.query(Player).filter_by(username=DEFAULT_USERNAME).first()
    if not player:
        server_seed, server_seed_hash = generate_server_seed()
        player = Player(username=DEFAULT_USERNAME, balance=STARTING_BALANCE, server_seed=server_seed,
                        server_seed_hash=server_seed_hash, client_seed='client-seed', nonce=0)
        db.add(player)
        db.commit()
        logger.info("Created default player %s", DEFAULT_USERNAME)


def _json_body():
    # corpo JSON precisa ser um objeto; None quando não for
    data = request.get_json(force=True, silent=True)
    if data is None and not request.get_data():
        return {}
    return data if isinstance(data, dict) else None


@app.errorhandler(SlotError)
def handle_slot_error(e):
    logger.warning("Rejected combination: %s", e)
    return jsonify({'error': str(e)}), 400


@app.get('/api/symbols')
def get_symbols_info():
    return jsonify({'symbols': list(SYMBOLS), 'paytable': PAYTABLE,
                    'probabilities': dict(zip(SYMBOLS, PROBABILITIES))})


@app.post('/api/score')
def score_combination():
    data = _json_body()
    if data is None:
        return jsonify({'error': 'request body must be a JSON object'}), 400
    symbols = data.get('symbols')
    return jsonify({'symbols': symbols, 'prize': score(symbols)})


@app.post('/api/score-many')
def score_combinations():
    data = _json_body()
    if data is None:
        return jsonify({'error': 'request body must be a JSON object'}), 400
    combinations = data.get('combinations')
    if not isinstance(combinations, list):
        return jsonify({'error': 'combinations must be a list'}), 400
    prizes = score_many(combinations)
    return jsonify({'prizes': prizes.tolist()})


@app.get('/api/balance')
def get_balance():
    username = request.args.get('username', DEFAULT_USERNAME)
    with SessionLocal() as db:
        p = db.query(Player).filter_by(username=username).first()
        if not p:
            return jsonify({'error':'user not found'}), 404
        return jsonify({'username': p.username, 'balance': round(p.balance,2),
                        'server_seed_hash': p.server_seed_hash, 'client_seed': p.client_seed, 'nonce': p.nonce})


@app.post('/api/play')
def play_slots():
    data = _json_body()
    if data is None:
        return jsonify({'error': 'request body must be a JSON object'}), 400
    username = data.get('username', DEFAULT_USERNAME)

    with SessionLocal() as db:
        p = db.query(Player).filter_by(username=username).first()
        if not p:
            return jsonify({'error':'user not found'}), 404
        if PLAY_COST > p.balance:
            logger.info("Play refused for %s: insufficient balance", username)
            return jsonify({'error':'insufficient balance'}), 400

        # símbolos determinísticos via provably fair
        result = play(p.server_seed, p.client_seed, p.nonce)
        net = result.prize - PLAY_COST

        p.balance += net
        p.nonce += 1
        db.add(PlayHistory(player_id=p.id, cost=PLAY_COST, prize=result.prize,
                           symbols=' '.join(result.symbols), nonce=p.nonce - 1))
        db.commit()
        logger.info("Play %s nonce=%d symbols=%s prize=%d", username, p.nonce - 1,
                    result.symbols, result.prize)

        return jsonify({
            'symbols': result.symbols,
            'prize': result.prize,
            'display': result.display,
            'cost': PLAY_COST,
            'net': net,
            'balance': round(p.balance,2),
            'provably_fair': {
                'server_seed_hash': p.server_seed_hash,
                'client_seed': p.client_seed,
                'nonce': p.nonce - 1
            }
        })


@app.get('/api/history')
def get_history():
    username = request.args.get('username', DEFAULT_USERNAME)
    limit = request.args.get('limit', 20, type=int)
    with SessionLocal() as db:
        p = db.query(Player).filter_by(username=username).first()
        if not p:
            return jsonify({'error':'user not found'}), 404
        plays = (db.query(PlayHistory).filter_by(player_id=p.id)
                 .order_by(PlayHistory.id.desc()).limit(max(limit, 0)).all())
        return jsonify({'username': p.username, 'plays': [h.to_dict() for h in plays]})


@app.post('/api/rotate-seed')
def rotate_seed():
    # revela a seed antiga para verificação e inicia uma nova
    data = _json_body()
    if data is None:
        return jsonify({'error': 'request body must be a JSON object'}), 400
    username = data.get('username', DEFAULT_USERNAME)
    with SessionLocal() as db:
        p = db.query(Player).filter_by(username=username).first()
        if not p:
            return jsonify({'error':'user not found'}), 404
        old_seed = p.server_seed
        old_hash = p.server_seed_hash
        new_seed, new_hash = generate_server_seed()
        p.server_seed = new_seed
        p.server_seed_hash = new_hash
        p.nonce = 0
        db.commit()
        logger.info("Rotated server seed for %s", username)

        return jsonify({'old_server_seed': old_seed, 'old_server_seed_hash': old_hash,
                        'verified': verify_server_seed(old_seed, old_hash),
                        'new_server_seed_hash': new_hash, 'nonce': 0})


@app.get('/api/payout-rate')
def payout_rate():
    return jsonify({'expected_payout_rate': expected_payout_rate()})


@app.post('/api/simulate')
def simulate():
    data = _json_body()
    if data is None:
        return jsonify({'error': 'request body must be a JSON object'}), 400
    try:
        plays = int(data.get('plays', 0))
    except (TypeError, ValueError):
        return jsonify({'error':'invalid number of plays'}), 400
    if plays <= 0 or plays > MAX_SIMULATED_PLAYS:
        return jsonify({'error':'invalid number of plays'}), 400
    return jsonify({'plays': plays, 'payout_rate': simulate_payout_rate(plays)})


if __name__ == '__main__':
    app.run(debug=False)
