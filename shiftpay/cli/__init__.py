"""shiftpay command-line interface."""
