"""Data models for a parsed Bruno request file.

The block parser builds one ParsedBruFile per .bru file. Models are frozen:
a parsed document is never merged with or mutated after parsing.
"""

from pydantic import BaseModel, ConfigDict

HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS")


class BruModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class BruMeta(BruModel):
    """The `meta { ... }` block."""

    name: str = ""
    request_type: str = "http"
    seq: int | None = None
    done: bool = False


class HttpRequest(BruModel):
    """Method and raw URL of the request line."""

    method: str = "GET"  # GET / POST / PUT / PATCH / DELETE / HEAD / OPTIONS
    url: str = ""  # may hold {{baseUrl}}, :id / {id} tokens and a query string


class RequestBody(BruModel):
    kind: str = "json"
    raw_content: str = ""  # not JSON-parsed yet


class Scripts(BruModel):
    pre: str | None = None
    post: str | None = None


class ParsedBruFile(BruModel):
    """A single request definition with all its blocks."""

    meta: BruMeta = BruMeta()
    request: HttpRequest = HttpRequest()
    headers: dict[str, str] | None = None  # insertion order preserved
    body: RequestBody | None = None
    docs: str | None = None
    scripts: Scripts | None = None
    tests: str | None = None

    @property
    def is_valid(self) -> bool:
        """A document without a URL cannot be turned into an operation."""
        return bool(self.request.url)
