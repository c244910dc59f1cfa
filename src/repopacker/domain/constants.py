from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Provides centralized access to application-wide constants: the built-in
ignore layer, structural directories pruned during traversal, the binary
extension registry, the fenced-block language table and the closed set
of output profile identifiers.
"""

from typing import Dict, FrozenSet, List, Tuple

APP_VERSION = "1.0.0"
CURRENT_CONFIG_VERSION = "1.0.0"

DEFAULT_MAX_FILE_SIZE_MB = 50.0
DEFAULT_PROFILE = "generic"
DEFAULT_TOKENIZER_ENCODING = "cl100k_base"
HEURISTIC_ENCODING = "heuristic"

LARGEST_FILES_LIMIT = 10
FILTER_PROGRESS_BATCH = 50

# -----------------------------------------------------------------------------
# TRAVERSAL AND IGNORE DEFAULTS
# -----------------------------------------------------------------------------

# Directories never descended into, regardless of user patterns
STRUCTURAL_EXCLUSIONS: FrozenSet[str] = frozenset({
    "node_modules",
    ".git",
    "dist",
    "build",
})

# Built-in ignore layer, evaluated after .gitignore and before user patterns
DEFAULT_IGNORE_PATTERNS: Tuple[str, ...] = (
    "node_modules",
    ".git",
    "dist",
    "build",
    "*.log",
    "*.lock",
)

# -----------------------------------------------------------------------------
# BINARY DETECTION
# -----------------------------------------------------------------------------

BINARY_EXTENSIONS: FrozenSet[str] = frozenset({
    # Images
    ".jpg", ".jpeg", ".png", ".gif", ".bmp", ".ico", ".webp", ".tiff", ".svg",
    # Audio
    ".mp3", ".wav", ".ogg", ".flac", ".aac",
    # Video
    ".mp4", ".webm", ".avi", ".mov", ".wmv", ".flv", ".mkv",
    # Archives
    ".zip", ".rar", ".7z", ".tar", ".gz", ".bz2",
    # Documents
    ".pdf", ".doc", ".docx", ".ppt", ".pptx", ".xls", ".xlsx",
    # Executables
    ".exe", ".dll", ".so", ".dylib",
    # Fonts
    ".ttf", ".otf", ".woff", ".woff2", ".eot",
    # Compiled objects
    ".pyc", ".class", ".o", ".obj",
    # Databases
    ".db", ".sqlite", ".mdb",
})

# -----------------------------------------------------------------------------
# MINIFICATION CATEGORIES
# -----------------------------------------------------------------------------

JS_EXTENSIONS: FrozenSet[str] = frozenset({".js", ".jsx", ".ts", ".tsx"})
CSS_EXTENSIONS: FrozenSet[str] = frozenset({".css"})
HTML_EXTENSIONS: FrozenSet[str] = frozenset({".html", ".htm"})

# -----------------------------------------------------------------------------
# FENCED BLOCK LANGUAGE TAGS
# -----------------------------------------------------------------------------

LANGUAGE_BY_EXTENSION: Dict[str, str] = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".html": "html",
    ".css": "css",
    ".scss": "scss",
    ".sass": "sass",
    ".less": "less",
    ".json": "json",
    ".md": "markdown",
    ".py": "python",
    ".rb": "ruby",
    ".java": "java",
    ".c": "c",
    ".cpp": "cpp",
    ".cs": "csharp",
    ".go": "go",
    ".php": "php",
    ".swift": "swift",
    ".kt": "kotlin",
    ".rs": "rust",
    ".sh": "bash",
    ".bat": "batch",
    ".ps1": "powershell",
    ".sql": "sql",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".xml": "xml",
    ".vue": "vue",
    ".svelte": "svelte",
    ".graphql": "graphql",
    ".gql": "graphql",
    ".dart": "dart",
    ".elm": "elm",
    ".ex": "elixir",
    ".exs": "elixir",
    ".erl": "erlang",
    ".hrl": "erlang",
    ".fs": "fsharp",
    ".fsx": "fsharp",
    ".hs": "haskell",
    ".lhs": "haskell",
    ".lua": "lua",
    ".pl": "perl",
    ".r": "r",
    ".scala": "scala",
    ".clj": "clojure",
    ".toml": "toml",
    ".ini": "ini",
    ".tf": "terraform",
    ".dockerfile": "dockerfile",
}

# -----------------------------------------------------------------------------
# OUTPUT PROFILES
# -----------------------------------------------------------------------------

TARGET_PROFILES: List[str] = ["generic", "claude", "chatgpt", "perplexity", "gemini"]
