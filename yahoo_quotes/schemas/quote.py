from pydantic import BaseModel, ConfigDict


class Quote(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: str = ""
    name: str = ""
    previous_close: float = 0.0
    open: float = 0.0
    price: float = 0.0
    change: float = 0.0
    change_percent: float = 0.0
    day_low: float = 0.0
    day_high: float = 0.0
    last_trade_date: str = ""
    last_trade_time: str = ""
    last_trade: float = 0.0
