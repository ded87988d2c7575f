"""Create demo articles and categories for development/testing."""

from komnottra import storage

DEMO_CATEGORIES = ["News", "Culture", "Travel", "Technology"]

DEMO_ARTICLES = [
    {
        "title": "Angkor at Dawn",
        "excerpt": "Why the sunrise over the temple towers is worth the 4am alarm.",
        "content": "<p>Long before the tour buses arrive, the reflecting pool in front of "
        "Angkor Wat turns pink, then gold. Bring a torch, a sweater and patience.</p>",
        "author": "Editorial Team",
        "categories": ["Travel", "Culture"],
    },
    {
        "title": "Phnom Penh's New Riverside Market",
        "excerpt": "Street food, crafts and a night market on the Sisowath Quay.",
        "content": "<p>The riverside redevelopment opened this weekend with more than a "
        "hundred stalls selling food, textiles and silverwork.</p>",
        "author": "Editorial Team",
        "category": "News",
    },
    {
        "title": "Khmer Unicode on the Web",
        "excerpt": "Getting fonts, line breaking and search right for Khmer script.",
        "content": "<p>Khmer text has no spaces between words, which makes line breaking "
        "and search harder than it looks.</p>",
        "author": "Editorial Team",
        "categories": ["Technology", "", "Culture"],
    },
]


def create_demo_data() -> None:
    """Wipe existing articles/categories and create fresh demo data."""
    storage.write_json(storage.articles_path(), [])
    storage.write_json(storage.categories_path(), [])

    for name in DEMO_CATEGORIES:
        storage.add_category(name)
    # Oldest first so the list ends up newest first
    for article in reversed(DEMO_ARTICLES):
        storage.create_article(dict(article))

    print(f"Created {len(DEMO_CATEGORIES)} demo categories + {len(DEMO_ARTICLES)} demo articles.")
