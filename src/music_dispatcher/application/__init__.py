"""
Application Layer

Orchestrates the domain against the remote audio node.

Structure:
- interfaces/: Port interfaces for the remote player, node and voice gateway
- services/: The per-session dispatcher, the session registry and bus subscribers
"""
