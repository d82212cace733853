"""Request bodies for the HTTP API."""

from datetime import date

from pydantic import AliasChoices, BaseModel, Field, StrictBool, StrictInt


class SignupRequest(BaseModel):
    full_name: str = Field(validation_alias=AliasChoices("full_name", "fullName"))
    email: str
    password: str


class LoginRequest(BaseModel):
    email: str
    password: str


class ProfileUpdateRequest(BaseModel):
    """Profile changes. Credentials are not accepted here and are dropped."""

    full_name: str | None = Field(
        default=None, validation_alias=AliasChoices("full_name", "fullName")
    )
    age: int | None = None
    gender: str | None = None
    weight_kg: float | None = Field(
        default=None, validation_alias=AliasChoices("weight_kg", "weight")
    )
    height_cm: float | None = Field(
        default=None, validation_alias=AliasChoices("height_cm", "height")
    )
    activity_level: str | None = Field(
        default=None, validation_alias=AliasChoices("activity_level", "activityLevel")
    )
    avatar_url: str | None = Field(
        default=None, validation_alias=AliasChoices("avatar_url", "profilePic")
    )


class MealCreateRequest(BaseModel):
    food_item_id: int
    quantity_grams: float
    meal_date: date | None = None


class MealUpdateRequest(BaseModel):
    quantity_grams: float


class CompletedWorkoutRequest(BaseModel):
    workout_name: str
    workout_type: str
    actual_duration_minutes: StrictInt
    planned_duration_minutes: StrictInt | None = None
    intensity: str | None = None
    workout_template_id: int | None = None
    notes: str | None = None
    workout_date: date | None = None


class PreferencesUpdateRequest(BaseModel):
    fitness_level: str | None = None
    daily_calorie_goal: StrictInt | None = None
    notifications_enabled: StrictBool | None = None
