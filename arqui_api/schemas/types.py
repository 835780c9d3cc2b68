"""
Shared Pydantic types for schema validation.

JsonDecimal: Decimal in Python, plain JSON number on the wire. Pydantic v2
serializes Decimal as a string by default, while API clients expect money
and area figures as numbers.
"""

from decimal import Decimal
from typing import Annotated
from pydantic import PlainSerializer

JsonDecimal = Annotated[
    Decimal,
    PlainSerializer(lambda v: float(v), return_type=float, when_used="json"),
]
