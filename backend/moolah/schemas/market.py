"""
Market data proxy schemas.
"""

from pydantic import BaseModel
from typing import Dict


class ExchangeRates(BaseModel):
    base: str
    date: str
    rates: Dict[str, float]
