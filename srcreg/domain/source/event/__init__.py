from srcreg.domain.source.event.source_registered import SourceRegistered

__all__ = ["SourceRegistered"]
