"""Run one native messaging exchange: ``python -m otpbridge``."""

from otpbridge.host.native import main

if __name__ == "__main__":
    raise SystemExit(main())
