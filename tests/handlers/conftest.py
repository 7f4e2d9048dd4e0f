import base64
import json
from types import SimpleNamespace
from typing import Any, Callable

import pytest


@pytest.fixture
def lambda_context() -> SimpleNamespace:
    return SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
    )


@pytest.fixture
def upload_event() -> Callable[..., dict[str, Any]]:
    """
    Build a POST /links/{slug}/image event.

    Usage:
        event = upload_event("abc", png_bytes)
    """

    def _build(slug: str | None, file_data: bytes | None = None, *, raw_file: str | None = None) -> dict[str, Any]:
        file_value = raw_file
        if file_value is None and file_data is not None:
            file_value = base64.b64encode(file_data).decode("utf-8")

        return {
            "httpMethod": "POST",
            "path": f"/links/{slug}/image",
            "pathParameters": {"slug": slug},
            "body": json.dumps({"file": file_value}),
        }

    return _build


@pytest.fixture
def get_event() -> Callable[[str | None], dict[str, Any]]:
    def _build(slug: str | None) -> dict[str, Any]:
        return {
            "httpMethod": "GET",
            "path": f"/links/{slug}/image",
            "pathParameters": {"slug": slug},
        }

    return _build
