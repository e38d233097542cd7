# Core Cryptography Module
"""
Core numeric routines behind the demonstrations:
- Textbook RSA mathematics (rsa_math)
- Text <-> integer message encoding (text_codec)
- Avalanche and birthday-attack statistics (hash_utils)
"""
