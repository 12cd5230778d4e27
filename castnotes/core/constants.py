"""Application-wide constants."""

# ---------------------------------------------------------------------------
# Transcription
# ---------------------------------------------------------------------------
TRANSCRIPTION_MODEL = "whisper-1"
TRANSCRIPTION_TEMPERATURE = 0.2

# Name and media type given to audio fetched from a remote URL.
URL_AUDIO_FILENAME = "audio-from-url"
DEFAULT_AUDIO_MEDIA_TYPE = "audio/mpeg"

# ---------------------------------------------------------------------------
# Summarization
# ---------------------------------------------------------------------------
SUMMARY_MODEL = "gpt-4o"
SUMMARY_TEMPERATURE = 0.5

SUMMARY_SYSTEM_PROMPT = (
    "You are an expert content producer. Given a podcast transcript, produce concise, actionable, "
    "and engaging outputs as strict JSON. Keep language clear and skimmable."
)

SUMMARY_USER_PROMPT_TEMPLATE = (
    "Transcript:\n\n{transcript}\n\n"
    'Return ONLY a JSON object with keys: {{"keyPoints": string[], "highlights": string[], '
    '"timestampedNotes": {{"timestamp": string, "note": string}}[], "tweetThread": string[], '
    '"promoCaptions": string[], "seoTitles": string[]}}. '
    "Each array must contain 4-10 items. If timestamps are unavailable, infer approximate mm:ss. "
    "No markdown, no extra commentary."
)
