"""URL fingerprinting."""

import hashlib
from typing import Literal

from srcreg.domain.source.model.value import Fingerprint

FingerprintAlgorithm = Literal["sha256", "sha3_256", "blake2b"]

_DIGEST_SIZE = 32


class Fingerprinter:
    """Hashes the raw bytes of a URL into a fixed-width Fingerprint.

    Text URLs are encoded as UTF-8 first; lone surrogates are kept as their
    raw code units rather than rejected. No normalisation happens:
    "https://a.com" and "https://a.com/" are different URLs.
    """

    def __init__(self, algorithm: FingerprintAlgorithm = "sha256") -> None:
        if algorithm not in ("sha256", "sha3_256", "blake2b"):
            raise ValueError(f"Unsupported fingerprint algorithm: {algorithm}")
        self.algorithm = algorithm

    def __call__(self, url: str | bytes) -> Fingerprint:
        data = url.encode("utf-8", errors="surrogatepass") if isinstance(url, str) else url
        if self.algorithm == "blake2b":
            digest = hashlib.blake2b(data, digest_size=_DIGEST_SIZE)
        else:
            digest = hashlib.new(self.algorithm, data)
        return Fingerprint(digest.hexdigest())

    def __repr__(self) -> str:
        return f"Fingerprinter({self.algorithm!r})"
