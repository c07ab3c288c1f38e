"""Export: sitemap, Atom feed, search index, and static asset copying."""
