"""Enum types mirroring the status and category columns in the schema."""

from enum import Enum


class GigStatus(str, Enum):
    """Lifecycle status of a gig.

    ``completed`` exists in the schema but no transition reaches it yet.
    """
    open = "open"
    assigned = "assigned"
    completed = "completed"


class ApplicationStatus(str, Enum):
    """Review status of an application."""
    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"


class EscrowStatus(str, Enum):
    pending = "pending"
    released = "released"


class GigCategory(str, Enum):
    """Categories offered by the gig posting form."""
    web_development = "Web Development"
    mobile_development = "Mobile Development"
    ui_ux_design = "UI/UX Design"
    writing_translation = "Writing & Translation"
    data_science = "Data Science"
    blockchain_development = "Blockchain Development"
    smart_contract_audit = "Smart Contract Audit"
    nft_design = "NFT Design"
    marketing = "Marketing"
    other = "Other"


class LinkPlatform(str, Enum):
    github = "github"
    linkedin = "linkedin"
    portfolio = "portfolio"
