from .buffer import ArithmeticBuffer, TimedBuffer

__all__ = ["TimedBuffer", "ArithmeticBuffer"]
