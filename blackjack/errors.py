"""Named failures raised by the engine and the persistence layer."""


class BlackjackError(Exception):
    """Base class for all blackjack table errors."""


class DeckExhaustedError(BlackjackError, IndexError):
    """Raised when a card is dealt from an empty deck.

    Normal single-hand play with one or two decks never reaches this,
    so it indicates a sequencing bug and is not meant to be recovered.
    """


class SaveNotFoundError(BlackjackError, FileNotFoundError):
    """Raised when no saved game exists at the configured path."""


class SnapshotDecodeError(BlackjackError, ValueError):
    """Raised when a saved snapshot is corrupt or in a foreign format."""


class SnapshotEncodeError(BlackjackError, ValueError):
    """Raised when a game cannot be written as a snapshot."""
