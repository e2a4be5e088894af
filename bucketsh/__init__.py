"""
bucketsh - A shell for browsing and editing nested-bucket key-value stores.

Main API:
    from bucketsh.store import BucketStore
    from bucketsh.vfs import RootLevel, resolve

    # Open (or create) a store
    store = BucketStore.open("data.db", create=True)

    # Navigate with levels
    root = RootLevel(store)
    root.mkdir("people")
    people = resolve(root, "people")
    people.put("alice", "admin")
    people.list()        # ['alice']
    people.get("alice")  # b'admin'

    # Commit and close when done
    store.commit()
    store.close()
"""

from .store import BucketStore

__version__ = "0.1.0"
__all__ = ["BucketStore"]
