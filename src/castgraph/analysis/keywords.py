# src/castgraph/analysis/keywords.py
"""Vocabulary tables used by the keyword relationship extractor.

Every table is an immutable constant so tests can assert membership and the
lists can grow without touching extraction logic.  Bump
``KEYWORD_TABLE_VERSION`` whenever a table changes, since stored analyses
were classified against the previous vocabulary.

``ENEMY_KEYWORDS`` and ``ALLY_KEYWORDS`` are matched as plain substrings of
lower-cased scene text, so terms that commonly hide inside unrelated words
("ally" in "really", "rage" in "courage", "kill" in "skill") are left out.
"""

from __future__ import annotations

KEYWORD_TABLE_VERSION = "2024.2"

# Camera, lighting, sound and VFX vocabulary that often appears capitalized in
# director notes ("Lighting: 'soft key'") and must never be taken for a name.
TECHNICAL_TERMS: frozenset[str] = frozenset(
    {
        # lenses and optics
        "lens", "lenses", "mm", "35mm", "50mm", "85mm", "24mm", "wide", "telephoto",
        "fisheye", "anamorphic", "prime", "macro", "zoom", "focus", "aperture",
        "shutter", "iso", "exposure", "bokeh", "depth", "field", "shallow", "deep",
        "rack", "flare",
        # framing and camera movement
        "camera", "shot", "shots", "angle", "angles", "close", "closeup", "close-up",
        "medium", "long", "extreme", "establishing", "insert", "cutaway", "reverse",
        "over", "shoulder", "ots", "pov", "ecu", "cu", "mcu", "ms", "ls", "ws",
        "low", "high", "dutch", "overhead", "aerial", "birdseye", "pan", "tilt",
        "dolly", "crane", "tracking", "handheld", "steadicam", "gimbal", "drone",
        "tripod", "push", "pull", "whip", "frame", "frames", "framing", "fps",
        # lighting
        "lighting", "light", "lights", "key", "fill", "rim", "backlight", "natural",
        "ambient", "soft", "hard", "golden", "hour", "silhouette", "noir", "neon",
        "volumetric", "haze", "practical", "tungsten", "daylight", "fluorescent",
        "led", "diffuse", "diffused", "bounce", "reflector", "spotlight", "strobe",
        "chiaroscuro", "contrast",
        # editing and transitions
        "cut", "fade", "dissolve", "wipe", "transition", "montage", "match",
        "jump", "smash", "slow", "motion", "timelapse", "sequence", "take",
        # colour and vfx
        "color", "colour", "grade", "grading", "saturation", "lut", "vfx", "cgi",
        "sfx", "render", "composite", "green", "screen", "greenscreen", "chroma",
        "matte", "particles",
        # sound
        "sound", "audio", "music", "score", "foley", "ambience", "dialogue",
        "voiceover", "vo", "mix",
        # production and style
        "scene", "int", "ext", "interior", "exterior", "day", "night", "dawn",
        "dusk", "cinematic", "film", "style", "stunt", "stunts", "physics",
        "director", "storyboard", "prompt", "visual", "action",
        # director-note labels ("Mood: 'tense'")
        "mood", "tone", "setting", "settings", "location", "locations", "prop",
        "props", "wardrobe", "costume", "costumes", "makeup", "emotion",
        "emotions", "atmosphere", "set", "blocking", "pacing", "beat", "beats",
    }
)

STOPWORDS: frozenset[str] = frozenset(
    {
        "a", "an", "the", "and", "or", "but", "if", "then", "else", "when",
        "while", "i", "me", "my", "you", "your", "he", "him", "his", "she",
        "her", "hers", "it", "its", "we", "us", "our", "they", "them", "their",
        "this", "that", "these", "those", "there", "here", "what", "which",
        "who", "whom", "whose", "where", "why", "how", "is", "are", "was",
        "were", "be", "been", "being", "have", "has", "had", "do", "does",
        "did", "not", "no", "yes", "so", "as", "at", "by", "for", "from", "in",
        "into", "of", "on", "onto", "to", "with", "without", "up", "down",
        "out", "again", "after", "before", "now", "just", "also", "only",
        "very", "all", "any", "each", "every", "some", "one", "two", "suddenly",
        "meanwhile", "finally", "later", "still", "even", "because", "though",
        "although", "everyone", "someone", "nobody", "everybody", "somebody",
        "mr", "mrs", "dr", "sir", "madam", "narrator", "man", "woman", "boy",
        "girl", "people", "note", "notes",
    }
)

ENEMY_KEYWORDS: tuple[str, ...] = (
    "attack",
    "fight",
    "fought",
    "battle",
    "against",
    "enemy",
    "enemies",
    "rivalry",
    "rivals",
    "betray",
    "traitor",
    "threat",
    "conflict",
    "hostile",
    "confront",
    "argue",
    "argument",
    "furious",
    "fury",
    "hatred",
    "hated",
    "despise",
    "revenge",
    "vengeance",
    "destroy",
    "murder",
    "ambush",
    "duel",
    "oppose",
    "insult",
    "accuse",
    "stabbed",
    "punch",
    "glare",
)

ALLY_KEYWORDS: tuple[str, ...] = (
    "trust",
    "friend",
    "allies",
    "alliance",
    "allied",
    "together",
    "side by side",
    "help",
    "protect",
    "defend",
    "support",
    "loyal",
    "rescue",
    "comfort",
    "embrace",
    "beloved",
    "in love",
    "thank",
    "grateful",
    "forgive",
    "reassure",
    "partner",
    "teamwork",
    "team up",
    "cooperate",
    "cooperation",
    "united",
    "mentor",
    "smile",
    "bonded",
)

# Narrative attribution vocabulary used when mining names from free text.
REPORTING_VERBS: tuple[str, ...] = (
    "said",
    "says",
    "replied",
    "answered",
    "whispered",
    "shouted",
    "exclaimed",
    "muttered",
    "thought",
)

BODY_NOUNS: tuple[str, ...] = ("voice", "hand", "eyes", "face", "body")

ROLE_NOUNS: tuple[str, ...] = (
    "protagonist",
    "hero",
    "villain",
    "antagonist",
    "character",
)

# Bounds applied to mined candidate names.
MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 29
MAX_NAME_WORDS = 2

# Pairs above this strength with no net conflict default to allies.
ALLY_STRENGTH_THRESHOLD = 0.7


def is_denied_word(word: str) -> bool:
    """Return ``True`` if ``word`` is technical vocabulary or a stopword."""
    lowered = word.lower()
    return lowered in TECHNICAL_TERMS or lowered in STOPWORDS


__all__ = [
    "KEYWORD_TABLE_VERSION",
    "TECHNICAL_TERMS",
    "STOPWORDS",
    "ENEMY_KEYWORDS",
    "ALLY_KEYWORDS",
    "REPORTING_VERBS",
    "BODY_NOUNS",
    "ROLE_NOUNS",
    "MIN_NAME_LENGTH",
    "MAX_NAME_LENGTH",
    "MAX_NAME_WORDS",
    "ALLY_STRENGTH_THRESHOLD",
    "is_denied_word",
]
