"""Site graph: routes, pages, sidebar, nav, and prev/next links."""
