from infrastructure.storage.preference_store import JsonPreferenceStore

__all__ = [
    "JsonPreferenceStore",
]
