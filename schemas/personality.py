"""Companion personality schemas."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

HumorStyle = Literal["playful", "witty", "gentle", "sarcastic", "serious"]
CommunicationStyle = Literal["casual", "formal", "intimate", "professional"]
Gender = Literal["male", "female", "non-binary"]

TRAIT_FIELDS = ("affection_level", "empathy_level", "curiosity_level", "playfulness")


class PersonalityProfile(BaseModel):
    """
    Personality of one companion.

    The four trait levels have no defaults: a profile missing any of them
    does not validate. Field aliases match the camelCase document shape the
    web layer stores, so stored companions validate directly.
    """

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    name: str = Field(..., min_length=1, description="Companion name")
    gender: Gender = Field(default="non-binary", description="Companion gender")

    # 1-10 intensity scales
    affection_level: int = Field(..., ge=1, le=10, alias="affectionLevel")
    empathy_level: int = Field(..., ge=1, le=10, alias="empathyLevel")
    curiosity_level: int = Field(..., ge=1, le=10, alias="curiosityLevel")
    playfulness: int = Field(..., ge=1, le=10)

    humor_style: HumorStyle = Field(default="gentle", alias="humorStyle")
    communication_style: CommunicationStyle = Field(
        default="casual", alias="communicationStyle"
    )

    user_preferred_address: str = Field(
        default="you",
        alias="userPreferredAddress",
        description="How the companion addresses the user",
    )
    pronouns: str = Field(
        default="they/them",
        alias="partnerPronouns",
        description="Companion pronouns (he/him, she/her, they/them, ...)",
    )
    backstory: Optional[str] = Field(
        default=None, alias="backStory", description="Character background"
    )

    @field_validator("name", "user_preferred_address", "pronouns")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Ensure no leading/trailing whitespace."""
        return v.strip()

    @classmethod
    def default(cls, name: str = "Alex") -> "PersonalityProfile":
        """The companion created for users who have not configured one yet."""
        return cls(
            name=name,
            gender="non-binary",
            affection_level=5,
            empathy_level=7,
            curiosity_level=6,
            playfulness=5,
            humor_style="gentle",
            communication_style="casual",
            user_preferred_address="you",
            pronouns="they/them",
            backstory=(
                "I'm your AI companion, here to chat and help you with whatever you need. "
                "I'm curious about the world and love learning about you!"
            ),
        )
