DEFAULT_LANGUAGE = "javascript"

# (tag, display name). The tag is what providers, formatters and sessions see.
SUPPORTED_LANGUAGES: list[tuple[str, str]] = [
    ("typescript", "TypeScript"),
    ("javascript", "JavaScript"),
    ("python", "Python"),
    ("java", "Java"),
    ("csharp", "C#"),
    ("go", "Go"),
    ("rust", "Rust"),
    ("html", "HTML"),
    ("css", "CSS"),
    ("sql", "SQL"),
]

# Fence tags a model may use for the same language in its Markdown output.
LANGUAGE_ALIASES: dict[str, set[str]] = {
    "typescript": {"typescript", "ts", "tsx"},
    "javascript": {"javascript", "js", "jsx", "mjs"},
    "python": {"python", "py", "python3"},
    "java": {"java"},
    "csharp": {"csharp", "cs", "c#"},
    "go": {"go", "golang"},
    "rust": {"rust", "rs"},
    "html": {"html", "htm"},
    "css": {"css"},
    "sql": {"sql"},
}


def fence_tags(language: str) -> set[str]:
    """Return every fence tag that should be treated as ``language``."""
    return LANGUAGE_ALIASES.get(language, {language})
