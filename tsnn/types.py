"""Typed dictionaries for the TSNN wire format."""

from typing import TypedDict

# ``from`` is a keyword, so the functional syntax is required.
SignedPayloadDict = TypedDict(
    "SignedPayloadDict",
    {
        "v": str,
        "r": str,
        "s": str,
        "from": str,
        "to": str,
        "value": str,
        "data": str,
        "rewardType": str,
        "rewardAmount": str,
    },
)
