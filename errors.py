class HuffmanError(Exception): # base class for coding errors
    pass


class EmptyInputError(HuffmanError, ValueError): # no symbols to build a tree from
    def __init__(self, message="cannot build a Huffman tree from an empty sequence"):
        super().__init__(message)


class UnknownSymbolError(HuffmanError, LookupError):
    def __init__(self, symbol):
        super().__init__(f"symbol {symbol!r} has no entry in the code table")
        self.symbol = symbol


class MalformedCodeError(HuffmanError, ValueError):
    """
    Encoded bits do not resolve to leaf boundaries (truncated or corrupted data)
    position is the index into the bit string where decoding gave up
    """
    def __init__(self, message, position):
        super().__init__(f"{message} (bit {position})")
        self.position = position


class QueueError(Exception): # base class for priority queue misuse
    pass


class EmptyQueueError(QueueError, IndexError):
    pass


class NotFoundError(QueueError, LookupError):
    pass


class DuplicateElementError(QueueError, ValueError):
    pass
