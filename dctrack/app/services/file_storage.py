from abc import ABC, abstractmethod


class IFileStorage(ABC):
    """Blob storage for installation attachments"""

    @abstractmethod
    def store(self, folder: str, filename: str, content: bytes) -> str:
        """Save content and return its storage path"""
        pass

    @abstractmethod
    def url(self, path: str) -> str:
        """Public URL for a stored path"""
        pass

    @abstractmethod
    def exists(self, path: str) -> bool:
        pass

    @abstractmethod
    def delete(self, path: str) -> bool:
        """Remove a stored file, returns False if it did not exist"""
        pass
