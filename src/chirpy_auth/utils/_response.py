import json
from typing import Self

from cross_web import Response as DuckResponse


class Response(DuckResponse):
    @classmethod
    def error(
        cls,
        error: str,
        error_description: str | None = None,
        status_code: int = 400,
    ) -> Self:
        body = {"error": error}

        if error_description:
            body["error_description"] = error_description

        return cls(
            status_code=status_code,
            body=json.dumps(body),
            headers={"Content-Type": "application/json"},
        )
