# Cleans up chapter markup scraped from the novel sites before it goes into the EPUB.
# Only a handful of characters are touched; everything else is passed through as-is.

# Characters the sites use that e-readers tend to render badly
replacements = [
    ('\u00a0', ' '),    # non-breaking space
    ('\u2018', "'"),
    ('\u2019', "'"),
    ('\u201c', '"'),
    ('\u201d', '"'),
    ('\u2026', '...'),  # horizontal ellipsis
    ('\u00f6', 'o'),
]


def normalize(raw):
    """
    Replaces breaking spaces, smart quotes and ellipses with plain characters and
    makes sure the result can be written as UTF-8 (anything that can't becomes '?').
    """
    formatted = raw
    for old, new in replacements:
        formatted = formatted.replace(old, new)

    # Lone surrogates can't be encoded, swap them for a placeholder instead of failing
    return formatted.encode('utf-8', errors='replace').decode('utf-8')
