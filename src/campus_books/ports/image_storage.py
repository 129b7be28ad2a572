from __future__ import annotations

from abc import ABC, abstractmethod

from campus_books.domain.listing import ImageUpload


class ImageStorage(ABC):
    """
    Port for listing image storage.

    save() must not return until the bytes are durably written, so a
    returned path can be referenced from the database straight away.
    """

    @abstractmethod
    def save(self, image: ImageUpload) -> str:
        """Store the image and return its public relative path."""
        ...

    @abstractmethod
    def delete(self, path: str) -> None:
        """Remove a stored image; missing files are ignored."""
        ...
