"""
Package marker for source code under `src`.
`src.appointments` holds the domain rules and SQL, `src.api` the HTTP surfaces, `src.common` settings, logging, and engines.
"""
