from .codec import decode, decode_text, encode, encode_text
from .container import compress_bytes, compress_file, decompress_bytes, decompress_file
from .converters import BYTE, BinaryConverter, ByteConverter, CharConverter, UIntConverter
from .errors import (
    AlphabetTooLarge,
    CorruptPayload,
    EmptyAlphabet,
    HuffmanError,
    InvalidContainer,
    InvalidHeader,
    SingletonAlphabet,
    TruncatedStream,
)
