"""Services Layer - session lifecycle, request gateway and page flows.

Invariants:
    - SessionStore is the single owner of session state
    - Every backend call goes through RequestGateway.call()
"""
