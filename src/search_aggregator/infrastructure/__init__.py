"""
Infrastructure Layer - External Systems Integration

Contains:
- sources: Provider adapters (Wikipedia, Hacker News, Open Library, GitHub)
- cache: In-memory result cache
"""
