"""Named constants for Music Classifier. No magic strings."""

# --- Application ---
APP_NAME = "music_classifier"
APP_VERSION = "0.1.0"
CLI_NAME = "music-classifier"

# --- Supported Audio Extensions ---
# Extensions mutagen can read and write tags for. The scanner only picks up
# the subset listed in ``audio_extensions`` of the config.
SUPPORTED_EXTENSIONS = frozenset({
    ".mp3",
    ".flac",
    ".m4a",
    ".mp4",
    ".ogg",
    ".opus",
    ".wma",
    ".asf",
    ".ape",
    ".wv",
})
DEFAULT_AUDIO_EXTENSIONS = (".mp3",)

# --- Output Trees (relative to the musics root) ---
ARTISTS_DIRECTORY = "Artists"
GENRE_DIRECTORY = "Genre"
GENERATED_DIRECTORIES = frozenset({ARTISTS_DIRECTORY, GENRE_DIRECTORY})

# --- Naming ---
ARTIST_JOIN_SEPARATOR = ", "
TITLE_SEPARATOR = " - "
FILENAME_FIELD_SEPARATOR = "-"
FILENAME_ARTIST_SEPARATORS = ("/", ",")

# --- Tags ---
TAG_ARTIST_SEPARATOR = "/"
TAG_GENRE_SEPARATOR = ", "

# --- Genres ---
UNKNOWN_GENRE = "UNKNOWN"

# --- Paths ---
DEFAULT_CONFIG_FILENAME = "config.yaml"
DEFAULT_GENRES_FILENAME = "genres.yaml"
PARTIAL_COPY_SUFFIX = ".partial"

# Accepted values for log_level and --log-level.
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
