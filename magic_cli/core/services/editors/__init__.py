"""
External file editors — anchor-based, idempotent patches of files the
CLI does not own (pubspec.yaml, JSON translations, Android manifests,
plists, web/index.html).

Each module follows the same shape: a reader that raises
``NotFoundError`` for a missing file, a presence probe that never
raises, and insertion operations that raise ``StructureError`` when
their anchor is absent and leave the file untouched.
"""
