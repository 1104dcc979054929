"""
In-memory Kinto server for testing.

Implements the transport interface of the client (``send``) and answers the
way a Kinto server does: last_modified timestamps, If-Match/If-None-Match
preconditions, paginated plural endpoints with a Next-Page header, plural
deletes, batch requests, server info and the flush endpoint.
"""

from __future__ import annotations
import json
from collections import OrderedDict
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import parse_qs, urlencode, urlsplit

from kinto_client.transport.http import TransportResponse


Reply = Tuple[int, Dict[str, str], Any]


class FakeKintoServer:
    """
    Fake Kinto server speaking the wire protocol behind the transport interface.
    """

    def __init__(self, server_url: str = "http://kinto.test/v1", paginate_by: Optional[int] = None):
        """
        Initialize the fake server.

        Args:
            server_url: Base URL the client is configured with
            paginate_by: Default page size of plural endpoints (None: no pagination)
        """
        self.server_url = server_url.rstrip("/")
        self.version_prefix = urlsplit(self.server_url).path
        self.paginate_by = paginate_by
        self.objects: "OrderedDict[str, Dict[str, Any]]" = OrderedDict()
        self.calls: List[Dict[str, Any]] = []
        self.failures: Dict[Tuple[str, str], int] = {}
        self._clock = 1500000000000
        self._next_id = 0

    # =========================================================================
    # Test controls
    # =========================================================================

    def fail(self, method: str, path: str, status: int) -> None:
        """Answer ``status`` to the next ``method`` on ``path``."""
        self.failures[(method, path)] = status

    def calls_to(self, path: str) -> List[Dict[str, Any]]:
        return [call for call in self.calls if call["path"] == path]

    def seed(self, path: str, data: Dict[str, Any], permissions: Optional[Dict[str, List[str]]] = None) -> Dict[str, Any]:
        """Store an object directly, bypassing preconditions."""
        return self._write(path, data, permissions or {})

    # =========================================================================
    # Transport interface
    # =========================================================================

    def send(self, method, url, headers, data="", timeout=None, verify=True) -> TransportResponse:
        assert url.startswith(self.server_url), url
        parts = urlsplit(url[len(self.server_url):])
        path = parts.path or "/"
        query = {key: values[-1] for key, values in parse_qs(parts.query).items()}
        body = json.loads(data) if data else None

        self.calls.append({
            "method": method,
            "path": path,
            "query": query,
            "headers": dict(headers),
            "body": body,
            "timeout": timeout,
            "verify": verify,
        })

        status, reply_headers, reply_body = self.handle(method, path, query, headers, body)
        text = json.dumps(reply_body) if reply_body is not None else ""
        return TransportResponse(status=status, headers=reply_headers, text=text)

    # =========================================================================
    # Dispatch
    # =========================================================================

    def handle(self, method: str, path: str, query: Dict[str, str], headers: Dict[str, str], body: Any) -> Reply:
        headers = {name.lower(): value for name, value in headers.items()}

        failure = self.failures.pop((method, path), None)
        if failure is not None:
            return failure, {}, {"code": failure, "errno": 999, "message": "Injected failure"}

        if path == "/":
            return 200, {}, {
                "project_name": "kinto",
                "project_version": "14.0.0",
                "http_api_version": "1.22",
                "url": self.server_url + "/",
                "capabilities": {},
                "settings": {"batch_max_requests": 25},
            }
        if path == "/__flush__" and method == "POST":
            self.objects.clear()
            return 202, {}, None
        if path == "/batch" and method == "POST":
            return self._batch(body)

        segments = [segment for segment in path.split("/") if segment]
        if len(segments) % 2 == 1:
            return self._plural(method, path, query, headers, body)
        return self._single(method, path, headers, body)

    def _plural(self, method, path, query, headers, body) -> Reply:
        if not self._parent_exists(path):
            return self._error(403, "Parent does not exist")

        children = [key for key in self.objects if self._is_child(key, path)]
        limit = int(query.get("_limit", self.paginate_by or 0)) or None
        offset = int(query.get("_token", 0))

        if method == "GET":
            page = children[offset:offset + limit] if limit else children[offset:]
            reply_headers = {}
            if limit and offset + limit < len(children):
                reply_headers["Next-Page"] = self._next_page(path, limit, offset + limit)
            return 200, reply_headers, {"data": [dict(self.objects[key]["data"]) for key in page]}

        if method == "DELETE":
            page = children[:limit] if limit else children
            tombstones = [self._delete(key) for key in page]
            reply_headers = {}
            if limit and len(children) > limit:
                reply_headers["Next-Page"] = self._next_page(path, limit, None)
            return 200, reply_headers, {"data": tombstones}

        if method == "POST":
            data = dict((body or {}).get("data") or {})
            object_id = data.get("id") or self._generate_id()
            target = f"{path}/{object_id}"
            if target in self.objects:
                if headers.get("if-none-match") == "*":
                    return self._error(412, "Resource already exists")
                return 200, self._etag(target), self._envelope(target)
            error = self._validate(target, data)
            if error:
                return error
            data["id"] = object_id
            self._write(target, data, (body or {}).get("permissions") or {})
            return 201, self._etag(target), self._envelope(target)

        return self._error(405, "Method not allowed")

    def _single(self, method, path, headers, body) -> Reply:
        exists = path in self.objects
        precondition = self._check_preconditions(path, headers)

        if method == "GET":
            if not exists:
                return self._error(404, "Not found")
            if precondition == 304:
                return 304, {}, None
            return 200, self._etag(path), self._envelope(path)

        if precondition == 412:
            return self._error(412, "Resource was modified meanwhile")

        if method == "PUT":
            if not self._parent_exists(path):
                return self._error(403, "Parent does not exist")
            data = dict((body or {}).get("data") or {})
            error = self._validate(path, data)
            if error:
                return error
            data["id"] = path.rsplit("/", 1)[1]
            self._write(path, data, (body or {}).get("permissions") or {})
            return (200 if exists else 201), self._etag(path), self._envelope(path)

        if method == "DELETE":
            if not exists:
                return self._error(404, "Not found")
            return 200, {}, {"data": self._delete(path)}

        return self._error(405, "Method not allowed")

    def _batch(self, body) -> Reply:
        responses = []
        for request in (body or {}).get("requests", []):
            parts = urlsplit(request["path"])
            query = {key: values[-1] for key, values in parse_qs(parts.query).items()}
            status, headers, reply = self.handle(
                request["method"], parts.path, query, request.get("headers") or {}, request.get("body"),
            )
            responses.append({
                "status": status,
                "path": self.version_prefix + parts.path,
                "body": reply,
                "headers": headers,
            })
        return 200, {}, {"responses": responses}

    # =========================================================================
    # Storage
    # =========================================================================

    def _write(self, path, data, permissions) -> Dict[str, Any]:
        self._clock += 1
        data = dict(data)
        data["id"] = path.rsplit("/", 1)[1]
        data["last_modified"] = self._clock
        self.objects[path] = {"data": data, "permissions": dict(permissions)}
        return self.objects[path]

    def _delete(self, path) -> Dict[str, Any]:
        for key in [key for key in self.objects if key.startswith(path + "/")]:
            del self.objects[key]
        deleted = self.objects.pop(path)
        self._clock += 1
        return {"id": deleted["data"]["id"], "last_modified": self._clock, "deleted": True}

    def _envelope(self, path) -> Dict[str, Any]:
        stored = self.objects[path]
        return {"data": dict(stored["data"]), "permissions": dict(stored["permissions"])}

    def _etag(self, path) -> Dict[str, str]:
        return {"ETag": '"%d"' % self.objects[path]["data"]["last_modified"]}

    def _check_preconditions(self, path, headers) -> Optional[int]:
        current = self.objects.get(path)
        current_etag = '"%d"' % current["data"]["last_modified"] if current else None

        if_match = headers.get("if-match")
        if if_match is not None:
            if current is None or (if_match != "*" and if_match != current_etag):
                return 412

        if_none_match = headers.get("if-none-match")
        if if_none_match is not None and current is not None:
            if if_none_match == "*":
                return 412
            if if_none_match == current_etag:
                return 304
        return None

    def _validate(self, path, data) -> Optional[Reply]:
        if "/groups/" in path and not isinstance(data.get("members"), list):
            return self._error(400, "members is required")
        return None

    def _parent_exists(self, path) -> bool:
        segments = [segment for segment in path.split("/") if segment]
        parent_segments = segments[:-2] if len(segments) % 2 == 0 else segments[:-1]
        if not parent_segments:
            return True
        return "/" + "/".join(parent_segments) in self.objects

    @staticmethod
    def _is_child(key, plural_path) -> bool:
        prefix = plural_path + "/"
        return key.startswith(prefix) and "/" not in key[len(prefix):]

    def _next_page(self, path, limit, token) -> str:
        query = {"_limit": limit}
        if token is not None:
            query["_token"] = token
        return f"{self.server_url}{path}?{urlencode(query)}"

    def _generate_id(self) -> str:
        self._next_id += 1
        return f"generated-{self._next_id:04d}"

    @staticmethod
    def _error(status, message) -> Reply:
        return status, {}, {"code": status, "errno": 100 + status % 100, "error": message, "message": message}


__all__ = ["FakeKintoServer"]
