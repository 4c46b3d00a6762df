import math
from typing import Dict, Hashable, Iterable, Iterator, List, Tuple

from errors import EmptyInputError, MalformedCodeError, UnknownSymbolError
from indexed_heap import IndexedMinHeap


class HuffmanNode: # Node for Huffman tree
    __slots__ = ("symbol", "frequency", "left", "right")

    def __init__(self, symbol, frequency, left=None, right=None):
        self.symbol = symbol    # char, byte, or None for internal nodes
        self.frequency = frequency
        self.left = left
        self.right = right

    def is_leaf(self) -> bool:
        return self.left is None # internal nodes always own two children

    def __repr__(self):
        if self.is_leaf():
            return f"HuffmanNode({self.symbol!r}, {self.frequency})"
        return f"HuffmanNode(<internal>, {self.frequency})"


def count_frequencies(data: Iterable[Hashable]) -> Tuple[Dict[Hashable, HuffmanNode], IndexedMinHeap]:
    """
    One pass over data: one leaf per distinct symbol, queued by its count

    Repeated symbols bump their leaf in place through increase_priority, so
    the queue is always consistent with the counts seen so far
    """
    leaves: Dict[Hashable, HuffmanNode] = {}
    queue = IndexedMinHeap()
    for symbol in data:
        node = leaves.get(symbol)
        if node is None:
            node = HuffmanNode(symbol, 1)
            leaves[symbol] = node
            queue.insert(node, 1)
        else:
            node.frequency += 1
            queue.increase_priority(node, node.frequency)
    return leaves, queue


def build_huffman_tree(queue: IndexedMinHeap) -> HuffmanNode: # queue: leaves keyed by frequency
    if len(queue) == 0:
        raise EmptyInputError()

    while len(queue) > 1:
        left = queue.extract_min()
        right = queue.extract_min()
        merged_node = HuffmanNode(None, left.frequency + right.frequency, left, right) # internal node with combined frequency
        queue.insert(merged_node, merged_node.frequency)

    return queue.extract_min() # root of the tree


def generate_huffman_codes(root: HuffmanNode) -> Dict[Hashable, str]: # root: root of the Huffman tree
    # Edge case of input with one unique symbol -> root is a leaf with an empty path
    # Force it to '0' so that encoding/decoding works
    if root.is_leaf():
        return {root.symbol: "0"}

    codes = {}
    stack = [(root, "")]
    while stack:
        node, current_code = stack.pop()
        if node.is_leaf():
            codes[node.symbol] = current_code
            continue
        stack.append((node.right, current_code + "1"))
        stack.append((node.left, current_code + "0"))
    return codes # return the mapping of symbols to their corresponding Huffman codes


def huffman_encode(data: Iterable[Hashable], code_map: Dict[Hashable, str]) -> str: # data: symbols to encode, code_map: dict of symbol -> Huffman code
    parts = []
    for symbol in data:
        code = code_map.get(symbol)
        if code is None:
            raise UnknownSymbolError(symbol)
        parts.append(code)
    return "".join(parts)


def huffman_decode(bitstring: str, root: HuffmanNode) -> List[Hashable]: # bitstring: the encoded string of '0's and '1's, root: root of the Huffman tree
    decoded = []

    # Single leaf tree: every bit is one '0' code
    if root.is_leaf():
        for position, bit in enumerate(bitstring):
            if bit != "0":
                raise MalformedCodeError(f"unexpected bit {bit!r} for a one-symbol code", position)
            decoded.append(root.symbol)
        return decoded

    current_node = root
    for position, bit in enumerate(bitstring):
        if bit == "0":
            current_node = current_node.left
        elif bit == "1":
            current_node = current_node.right
        else:
            raise MalformedCodeError(f"invalid bit {bit!r}", position)
        if current_node.is_leaf(): # reached a leaf
            decoded.append(current_node.symbol)
            current_node = root # reset to the root for the next symbol

    # an empty stream leaves the cursor on the internal root too
    if current_node is not root or not bitstring:
        raise MalformedCodeError("bit string ends inside a code", len(bitstring))
    return decoded


# Tree inspection

def iter_leaves(root: HuffmanNode) -> Iterator[HuffmanNode]:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_leaf():
            yield node
        else:
            stack.append(node.right)
            stack.append(node.left)


def code_lengths(code_map: Dict[Hashable, str]) -> Dict[Hashable, int]:
    return {symbol: len(code) for symbol, code in code_map.items()}


def weighted_path_length(code_map: Dict[Hashable, str], frequencies: Dict[Hashable, int]) -> int:
    """Total encoded length in bits: sum of frequency * code length"""
    return sum(frequencies[symbol] * len(code) for symbol, code in code_map.items())


def entropy_bits(frequencies: Dict[Hashable, int]) -> float:
    """Shannon entropy in bits per symbol, the lower bound for average code length"""
    total = sum(frequencies.values())
    if total == 0:
        return 0.0
    h = 0.0
    for count in frequencies.values():
        if count:
            p = count / total
            h -= p * math.log2(p)
    return h


class HuffmanCoder:
    """
    One Huffman coding session

    Owns the frequency queue, the leaf lookup, the tree and the code table
    built from one input. Typical use:

        coder = HuffmanCoder("abbcccc")
        bits = coder.encode("abbcccc")
        coder.decode(bits)  # -> "abbcccc"
    """

    def __init__(self, data=None):
        self.leaves: Dict[Hashable, HuffmanNode] = {}
        self.queue = IndexedMinHeap()
        self.root = None
        self.code_map: Dict[Hashable, str] = {}
        self._kind = list
        if data is not None:
            self.fit(data)

    def count_frequencies(self, data) -> None:
        if isinstance(data, str):
            self._kind = str
        elif isinstance(data, (bytes, bytearray)):
            self._kind = bytes
        else:
            self._kind = list
        self.leaves, self.queue = count_frequencies(data)
        self.root = None
        self.code_map = {}

    def build_tree(self) -> HuffmanNode:
        self.root = build_huffman_tree(self.queue)
        self.code_map = generate_huffman_codes(self.root)
        return self.root

    def fit(self, data) -> "HuffmanCoder":
        self.count_frequencies(data)
        self.build_tree()
        return self

    @property
    def tree(self) -> HuffmanNode:
        self._require_tree()
        return self.root

    @property
    def codes(self) -> Dict[Hashable, str]:
        self._require_tree()
        return dict(self.code_map)

    @property
    def frequencies(self) -> Dict[Hashable, int]:
        return {symbol: node.frequency for symbol, node in self.leaves.items()}

    def encode(self, data) -> str:
        self._require_tree()
        return huffman_encode(data, self.code_map)

    def decode(self, bitstring: str):
        self._require_tree()
        symbols = huffman_decode(bitstring, self.root)
        if self._kind is str:
            return "".join(symbols)
        if self._kind is bytes:
            return bytes(symbols)
        return symbols

    def _require_tree(self) -> None:
        if self.root is None:
            raise RuntimeError("HuffmanCoder has no tree yet; call fit() first")
