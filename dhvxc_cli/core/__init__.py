"""
Core application engine for orchestrating the download process.

This package contains the primary logic. The `DownloadManager` acts
as the session coordinator, delegating the task of saving each individual
track log to the `IgcDownloader`.
"""
