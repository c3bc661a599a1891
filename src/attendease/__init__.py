"""AttendEase package.

Gym attendance and credit-wallet management organized by feature modules
(users, sessions, packages, ledger, ...) with a thin Flask controller layer
over snapshot-based services.
"""
