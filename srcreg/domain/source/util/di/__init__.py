from srcreg.domain.source.util.di.provider import SourceProvider

__all__ = ["SourceProvider"]
