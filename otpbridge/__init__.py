"""
otpbridge - native messaging bridge serving YubiKey OATH codes
"""

__version__ = "0.1.0"
__logo__ = "🔑"
