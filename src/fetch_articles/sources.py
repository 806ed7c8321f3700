RSS_FEEDS = {
    # Dev.to
    "devto": "https://dev.to/feed",
    # Hacker News (front page, via hnrss)
    "hackernews": "https://hnrss.org/frontpage",
    # Lobsters
    "lobsters": "https://lobste.rs/rss",
}

SOURCE_LABELS = {
    "devto": "Dev.to",
    "hackernews": "Hacker News",
    "lobsters": "Lobsters",
}
