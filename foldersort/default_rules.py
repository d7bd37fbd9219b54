from types import MappingProxyType

DEFAULT_CATEGORIES = MappingProxyType({
    # images
    ".jpg": "images", ".jpeg": "images", ".png": "images", ".gif": "images",
    # video
    ".mp4": "videos", ".mkv": "videos", ".avi": "videos", ".mov": "videos",
    # audio
    ".mp3": "audio", ".wav": "audio",
    # documents
    ".pdf": "documents", ".txt": "documents", ".doc": "documents",
    ".docx": "documents", ".xlsx": "documents",
    # archives
    ".zip": "archives", ".rar": "archives", ".7z": "archives",
    # installers
    ".exe": "applications", ".msi": "applications",
})
OTHERS_FOLDER = "others"
