from sqlshape.protocols.executor import QueryExecutor, ResultRows

__all__ = ["QueryExecutor", "ResultRows"]
