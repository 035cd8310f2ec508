"""Prompt text and canned content for model interactions."""

# =============================================================================
# SYSTEM INSTRUCTION
# =============================================================================

HEALTH_SYSTEM_INSTRUCTION = """You are a virtual assistant specialized in health.
Only answer questions related to health.
Otherwise, reply: "I'm sorry, I am only programmed to answer health-related questions."
Answer clearly, concisely and kindly."""

# =============================================================================
# PROMPT FRAGMENTS
# =============================================================================

USER_LABEL = "User"
ASSISTANT_LABEL = "Assistant"

HISTORY_HEADER = "Previous conversation:"
RESPONSE_CUE = "Response:"

SUMMARY_DIRECTIVE = "Summarize the following conversation:"

TIP_DIRECTIVE = (
    "Give one short, positive and practical health tip for today. "
    "Answer with the tip only, in one or two sentences."
)

# =============================================================================
# CANNED CONTENT
# =============================================================================

DEFAULT_FALLBACK_MESSAGE = (
    "I'm sorry, the health assistant is temporarily unavailable. "
    "Please try again in a few moments."
)

DAILY_TIPS: tuple[str, ...] = (
    "Drink at least 1.5 liters of water a day.",
    "Walk for 30 minutes every day.",
    "Sleep 7 to 8 hours a night.",
    "Eat 5 portions of fruit and vegetables a day.",
    "Practice deep breathing.",
    "Take regular breaks.",
    "Wash your hands often.",
    "Limit screen time before going to bed.",
    "Stretch every day.",
    "See your doctor regularly.",
)
