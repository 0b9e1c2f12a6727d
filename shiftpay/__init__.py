"""shiftpay - Paycheck estimates from clock-in/clock-out records."""

__version__ = "0.3.0"
