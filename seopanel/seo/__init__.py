"""SEO consistency engine: catalog, composition, cache, redirects, audit"""
