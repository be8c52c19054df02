"""
ETag Helper

Generates ETags (checksums) for JSON API responses and answers conditional
requests carrying If-None-Match with 304 Not Modified.
"""

import hashlib
import json
from flask import request, Response, make_response
from functools import wraps
from typing import Any, Callable


def generate_etag(data: Any) -> str:
    """
    Generate ETag (checksum) from data.

    Args:
        data: Any JSON-serializable data

    Returns:
        str: quoted MD5 hash
    """
    # Stable JSON string (sorted keys)
    json_str = json.dumps(data, sort_keys=True, default=str)
    md5_hash = hashlib.md5(json_str.encode('utf-8')).hexdigest()
    return f'"{md5_hash}"'


def _not_modified(etag: str) -> Response:
    not_modified = make_response('', 304)
    not_modified.headers['ETag'] = etag
    not_modified.headers['Cache-Control'] = 'no-cache'
    return not_modified


def with_etag(f: Callable) -> Callable:
    """
    Decorator adding ETag support to a view returning a JSON response,
    optionally as a (response, status) tuple.

    Only successful (200) JSON responses get an ETag; error responses pass
    through untouched.

    Usage:
        @bp.route('/api/data')
        @with_etag
        def get_data():
            return jsonify({'data': ...})
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if_none_match = request.headers.get('If-None-Match')

        rv = f(*args, **kwargs)
        response = make_response(rv)

        if response.status_code != 200 or not response.is_json:
            return response

        etag = generate_etag(response.get_json())
        if if_none_match and if_none_match == etag:
            return _not_modified(etag)

        response.headers['ETag'] = etag
        response.headers['Cache-Control'] = 'no-cache'
        return response

    return decorated_function
