from sqlshape.engine.sql_engine import BufferedRows, SQLEngine

__all__ = ["BufferedRows", "SQLEngine"]
