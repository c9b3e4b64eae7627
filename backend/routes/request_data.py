from fastapi import Request


async def read_request_data(request: Request) -> dict[str, str]:
    """Return the posted fields from either a JSON object or a form body."""
    content_type = request.headers.get('content-type', '')

    if content_type.startswith('application/json'):
        try:
            body = await request.json()
        except ValueError:
            return {}
        if not isinstance(body, dict):
            return {}
        return {key: '' if value is None else str(value) for key, value in body.items()}

    form_data = await request.form()
    return {key: value for key, value in form_data.items() if isinstance(value, str)}
