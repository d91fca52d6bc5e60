"""Request URL -> contract path normalization."""

import re

HOST_TEMPLATE = re.compile(r"^\{\{[^}]*\}\}")
SCHEME_HOST = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://[^/]*")
PATH_PARAM = re.compile(r":(\w+)")


def normalize_url(url: str) -> str:
    """Turn a raw request URL into a contract path.

    Drops the query string and any leading `{{host}}` template or
    scheme://host part, then rewrites `:name` tokens to `{name}`.
    Idempotent: `{name}` tokens are left untouched.

    >>> normalize_url("{{baseUrl}}/api/users/:id?active=true")
    '/api/users/{id}'
    """
    path = url.split("?", 1)[0].strip()
    path = HOST_TEMPLATE.sub("", path)
    path = SCHEME_HOST.sub("", path)
    if not path.startswith("/"):
        path = "/" + path
    return PATH_PARAM.sub(r"{\1}", path)
