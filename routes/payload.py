# routes/payload.py

import json
from typing import Any, Dict

from fastapi import Request

from errors import ValidationError

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


async def read_payload(request: Request) -> Dict[str, Any]:
    """
    Read a write body as a plain dict, from JSON or from a form.
    Repeated form keys become lists; uploaded files are skipped.
    """
    content_type = request.headers.get("content-type", "").lower()

    if any(kind in content_type for kind in FORM_CONTENT_TYPES):
        form = await request.form()
        payload: Dict[str, Any] = {}
        for key in dict.fromkeys(form.keys()):
            values = [value for value in form.getlist(key) if isinstance(value, str)]
            if not values:
                continue
            payload[key] = values[0] if len(values) == 1 else values
        return payload

    body = await request.body()
    if not body.strip():
        return {}
    try:
        payload = json.loads(body)
    except ValueError:
        raise ValidationError("Request body is not valid JSON")
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload
