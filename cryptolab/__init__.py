# CryptoLab
"""
CryptoLab - interactive demonstrations of cryptographic concepts.

Modules:
- core_crypto: textbook RSA math, message encoding, hash statistics
- rsa_tool: key generation / encrypt / decrypt walkthrough
- hashing: multi-algorithm digests, avalanche effect, birthday attack
- integration: session event log
"""

__version__ = "1.0.0"
