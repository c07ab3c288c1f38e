"""Content layer: record types, discovery, frontmatter, and the file watcher."""
