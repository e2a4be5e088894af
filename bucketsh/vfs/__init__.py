"""Level model for navigating a bucket store.

The store is presented as a filesystem-like tree: buckets are directories
and values are files.

Architecture:

    ```
    /                      # RootLevel (buckets only)
    ├── people/            # BucketLevel
    │   ├── admins/        # BucketLevel, parent is people/
    │   │   └── alice      # value
    │   └── bob            # value
    └── settings/
    ```

Path Resolution:

    - Relative paths: people/admins, ../settings
    - Special: "." stays, ".." goes up (and stays at the root)
    - Empty segments ("a//b", "a/") are ignored

Usage Example:

    ```python
    from bucketsh.store import BucketStore
    from bucketsh.vfs import RootLevel, resolve

    store = BucketStore.open("data.db")
    root = RootLevel(store)

    admins = resolve(root, "people/admins")
    if admins is not None:
        print(admins.list())
        print(admins.get("alice"))
    ```
"""

from bucketsh.vfs.base import Level, RootLevel, BucketLevel
from bucketsh.vfs.resolver import resolve, split_key_path, complete_path

__all__ = [
    # Levels
    "Level",
    "RootLevel",
    "BucketLevel",
    # Path resolution
    "resolve",
    "split_key_path",
    "complete_path",
]
