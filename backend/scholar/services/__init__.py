"""Services Layer: operation invoker, request registry, chat session manager.

Invariants:
    - All backend traffic goes through OperationInvoker.invoke()
    - Stateful wrappers (registry, chat) keep state in memory only
"""
