# recibos_api/common/http.py
from flask import jsonify

def ok(data=None, status=200, message=None, **meta):
    payload = {"success": True, "data": data}
    if message:
        payload["message"] = message
    if meta:
        payload["meta"] = meta
    return jsonify(payload), status

def fail(message="Bad Request", status=400, code=None, detail=None):
    payload = {"success": False, "error": message}
    if code: payload["code"] = code
    if detail: payload["detail"] = detail
    return jsonify(payload), status
