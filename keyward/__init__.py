"""
Keyward -- Password Strength Analysis & Secure Generation
==========================================================

Client-side password strength scoring, privacy-preserving breach lookups
over a k-anonymity range API, and CSPRNG-backed password generation.

Modules:
    - keyward.core.engine: Central orchestrator
    - keyward.core.controller: Debounced analysis state machine
    - keyward.core.history: Keyed-hash analysis history
    - keyward.core.models: Pydantic data models
    - keyward.analyzers: Entropy, strength and breach analysis
    - keyward.generators: Secure password generation
    - keyward.output: Console output
    - keyward.cli: Click-based command-line interface

References:
    - NIST SP 800-63B (2017). Digital Identity Guidelines.
    - Shannon, C. E. (1948). A Mathematical Theory of Communication.
"""

__version__ = "1.0.0"
__tool_name__ = "keyward"
