class HuffmanError(ValueError):
    """Base class for every codec failure; a ValueError so callers can catch broadly."""


class InvalidHeader(HuffmanError):
    pass


class TruncatedStream(HuffmanError):
    pass


class EmptyAlphabet(HuffmanError):
    pass


class SingletonAlphabet(HuffmanError):
    pass


class CorruptPayload(HuffmanError):
    pass


class AlphabetTooLarge(HuffmanError):
    pass


class InvalidContainer(HuffmanError):
    pass
