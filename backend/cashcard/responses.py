"""
Cash Card API: JSON Response Rendering
======================================

What:  JSONResponse whose encoder writes decimal.Decimal values as raw JSON
       numbers, digit for digit.
How:   simplejson with use_decimal=True emits str(Decimal) unquoted, so
       Decimal("12345678901234567.89") becomes 12345678901234567.89 on the
       wire instead of a float approximation or a quoted string.
Who:   Returned by the cash card handler for found cards.
"""

from typing import Any

import simplejson
from fastapi.responses import JSONResponse


class DecimalJSONResponse(JSONResponse):

    def render(self, content: Any) -> bytes:
        return simplejson.dumps(
            content,
            use_decimal=True,
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
        ).encode("utf-8")
