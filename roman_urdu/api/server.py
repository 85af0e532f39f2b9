from __future__ import annotations
from typing import Any, Dict, List
from flask import Flask, request, jsonify

import json
import time
from collections import deque, defaultdict

from roman_urdu import runtime
from roman_urdu.config.env import get_api_config
from roman_urdu.errors import HostExecutionError, RefusedUnsafeToken
from roman_urdu.logger import get_logger

log = get_logger(__name__)

app = Flask(__name__)

# Configuration helpers (overridable via app.config in tests)

def _get_api_key() -> str | None:
    if 'API_KEY' in app.config:
        return app.config.get('API_KEY')
    return get_api_config().api_key


def _execute_allowed() -> bool:
    if 'ALLOW_EXECUTE' in app.config:
        return bool(app.config.get('ALLOW_EXECUTE'))
    return get_api_config().allow_execute


def _get_time_limit() -> float:
    t = app.config.get('EXECUTE_TIME_LIMIT_SEC')
    if t is None:
        t = get_api_config().execute_time_limit_sec
    return float(t)


def _get_rate_limit() -> tuple[int, float]:
    cfg = get_api_config()
    n = app.config.get('RATE_LIMIT_N')
    w = app.config.get('RATE_LIMIT_WINDOW_SEC')
    if n is None:
        n = cfg.rate_limit_n
    if w is None:
        w = cfg.rate_limit_window_sec
    return int(n), float(w)

_recent: dict[str, deque[float]] = defaultdict(lambda: deque(maxlen=100))
_MAX_TRACKED_CLIENTS = 256


def _prune_recent(now: float, window: float) -> None:
    for ip in [ip for ip, dq in _recent.items() if not dq or now - dq[-1] > window]:
        del _recent[ip]


def _client_ip() -> str:
    xff = request.headers.get('X-Forwarded-For')
    if xff:
        return xff.split(',')[0].strip()
    return request.remote_addr or 'anon'


def _check_api_key():
    api_key = _get_api_key()
    if api_key:
        provided = request.headers.get('X-API-Key')
        if provided != api_key:
            return jsonify({'error': 'unauthorized'}), 401
    return None


def _check_rate_limit(ip: str):
    n, window = _get_rate_limit()
    if n <= 0:
        return None
    now = time.time()
    if len(_recent) > _MAX_TRACKED_CLIENTS:
        _prune_recent(now, window)
    dq = _recent[ip]
    while dq and now - dq[0] > window:
        dq.popleft()
    if len(dq) >= n:
        retry = max(0.0, window - (now - dq[0]))
        resp = jsonify({'error': 'rate_limited'})
        resp.status_code = 429
        resp.headers['Retry-After'] = f"{retry:.2f}"
        return resp
    dq.append(now)
    return None

@app.before_request
def _auth_and_rate_limit():
    # Reads are open; anything that mutates the table or runs code is guarded
    if request.method == 'POST' and request.path in ('/mapping', '/execute'):
        unauthorized = _check_api_key()
        if unauthorized is not None:
            return unauthorized
        if request.path == '/execute':
            rl = _check_rate_limit(_client_ip())
            if rl is not None:
                return rl
    return None


def _code_from_payload(payload: Dict[str, Any]):
    code = payload.get('code')
    if not isinstance(code, str):
        return None
    return code


def _jsonable(value: Any) -> Any:
    # Functions and cyclic objects have no JSON form
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return None
    return value

@app.post('/transpile')
def post_transpile():
    payload = request.get_json(force=True, silent=True) or {}
    code = _code_from_payload(payload)
    if code is None:
        return jsonify({'error': 'code is required'}), 400
    return jsonify({'js': runtime.transpile(code)})

@app.post('/execute')
def post_execute():
    if not _execute_allowed():
        return jsonify({'error': 'execution_disabled'}), 403
    payload = request.get_json(force=True, silent=True) or {}
    code = _code_from_payload(payload)
    if code is None:
        return jsonify({'error': 'code is required'}), 400
    context = payload.get('context') or {}
    if not isinstance(context, dict):
        return jsonify({'error': 'context must be an object'}), 400

    lines: List[Dict[str, str]] = []
    try:
        result = runtime.execute(
            code,
            context,
            console=lambda level, line: lines.append({'level': level, 'line': line}),
            time_limit=_get_time_limit(),
        )
    except RefusedUnsafeToken as e:
        return jsonify({'error': 'refused_unsafe_token', 'token': e.token}), 422
    except HostExecutionError as e:
        log.info("Script failed: %s", e)
        return jsonify({'error': 'host_execution_error', 'message': str(e), 'console': lines}), 400
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    return jsonify({'result': _jsonable(result), 'console': lines})

@app.get('/mapping')
def get_mapping():
    return jsonify({'entries': [{'token': t, 'replacement': r} for t, r in runtime.mapping().items()]})

@app.post('/mapping')
def post_mapping():
    payload = request.get_json(force=True, silent=True) or {}
    entries = payload.get('entries')
    if not isinstance(entries, dict) or not entries:
        return jsonify({'error': 'entries must be a non-empty object'}), 400
    try:
        runtime.extend(entries)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    return jsonify({'count': len(runtime.mapping())})


if __name__ == '__main__':
    app.run(host='127.0.0.1', port=8000)
