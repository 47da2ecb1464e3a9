# app/schemas/statistics.py
from pydantic import BaseModel


class TimeBucketOut(BaseModel):
    label: str        # "2PM" in hour mode, "Mon" in day mode
    value: int        # occupancy percent, 0–100
    timestamp: str    # ISO start of the bucket window
