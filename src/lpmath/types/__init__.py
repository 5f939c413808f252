from . import aliases, concrete
from .concrete import AbstractPublisherMessage, Publisher, PublisherMixin, Subscriber

__all__ = (
    "AbstractPublisherMessage",
    "Publisher",
    "PublisherMixin",
    "Subscriber",
    "aliases",
    "concrete",
)
