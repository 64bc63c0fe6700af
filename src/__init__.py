"""Remote Docker Manager: инвентаризация и управление контейнерами по SSH."""

__version__ = "1.0.0"
