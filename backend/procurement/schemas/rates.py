"""Exchange rate schema"""
from pydantic import BaseModel


class RatesResponse(BaseModel):
    USD: float
    CNY: float
    live: bool
