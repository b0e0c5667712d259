"""Application constants.

Contains gig categories, credit rules, upload limits and mining parameters.
"""

# ---------------------------------------------------------------------------
# Gigs
# ---------------------------------------------------------------------------
MIN_GIG_CREDITS: int = 50

GIG_CATEGORIES: list[str] = [
    "Web Development",
    "Mobile Development",
    "UI/UX Design",
    "Writing & Translation",
    "Data Science",
    "Blockchain Development",
    "Smart Contract Audit",
    "NFT Design",
    "Marketing",
    "Other",
]

# ---------------------------------------------------------------------------
# Applications
# ---------------------------------------------------------------------------
QUICK_APPLY_COVER_LETTER: str = "I'm interested in this gig and would like to apply."

# PostgreSQL unique_violation
UNIQUE_VIOLATION_CODE: str = "23505"

# ---------------------------------------------------------------------------
# Profile links and uploads
# ---------------------------------------------------------------------------
LINK_PLATFORMS: tuple[str, ...] = ("github", "linkedin", "portfolio")

AVATAR_MAX_BYTES: int = 3 * 1024 * 1024
RESUME_MAX_BYTES: int = 5 * 1024 * 1024

AVATAR_CONTENT_TYPES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}
RESUME_CONTENT_TYPES: dict[str, str] = {
    "application/pdf": "pdf",
}

# ---------------------------------------------------------------------------
# Wallet
# ---------------------------------------------------------------------------
WEI_PER_ETH: int = 10**18

# ---------------------------------------------------------------------------
# Mining simulation
# One cycle is MINING_CYCLE_TICKS ticks of settings.MINING_TICK_SECONDS.
# ---------------------------------------------------------------------------
MINING_CYCLE_TICKS: int = 100
MINING_CYCLE_REWARD_ETH: float = 0.0001
ETH_TO_CREDITS_RATE: int = 50_000
MINING_HASH_RATE_MHS: float = 32.5
