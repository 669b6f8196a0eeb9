"""
Scoring Settings Models for the Job Match Scorer
"""
from pydantic import BaseModel, Field, root_validator

WEIGHT_FIELDS = ("skills", "experience", "location", "job_type", "salary", "education")


class ScoringWeights(BaseModel):
    """Factor weights for the composite match score"""
    skills: float = Field(default=0.35, ge=0.0, le=1.0, description="Weight for skills match")
    experience: float = Field(default=0.25, ge=0.0, le=1.0, description="Weight for experience match")
    location: float = Field(default=0.15, ge=0.0, le=1.0, description="Weight for location match")
    job_type: float = Field(default=0.10, ge=0.0, le=1.0, description="Weight for job type / availability match")
    salary: float = Field(default=0.10, ge=0.0, le=1.0, description="Weight for salary match")
    education: float = Field(default=0.05, ge=0.0, le=1.0, description="Weight for education match")

    # Runs on the whole model so defaulted weights count towards the total too
    @root_validator(skip_on_failure=True)
    def validate_total_weights(cls, values):
        total = sum(values[k] for k in WEIGHT_FIELDS)
        if abs(total - 1.0) > 0.01:  # Allow small floating point errors
            raise ValueError(f"Scoring weights must sum to 1.0, got {total:.2f}")
        return values


class ReasonThresholds(BaseModel):
    """Factor score cut-offs that turn into reasons and warnings"""
    skills_strong: int = Field(default=70, ge=0, le=100, description="Skills score above this is a strong match")
    skills_moderate: int = Field(default=40, ge=0, le=100, description="Skills score above this is a moderate match")
    experience_strong: int = Field(default=70, ge=0, le=100, description="Experience score above this aligns well")
    experience_low: int = Field(default=30, ge=0, le=100, description="Experience score below this raises a warning")
    location_good: int = Field(default=50, ge=0, le=100, description="Location score above this is compatible")
    salary_good: int = Field(default=70, ge=0, le=100, description="Salary score above this aligns with expectations")
    salary_low: int = Field(default=50, ge=0, le=100, description="Compared salary score below this raises a warning")

    @root_validator(skip_on_failure=True)
    def validate_skills_order(cls, values):
        if values["skills_moderate"] >= values["skills_strong"]:
            raise ValueError("skills_moderate must be less than skills_strong")
        return values


class ScoringSettings(BaseModel):
    """Complete scorer configuration"""
    weights: ScoringWeights = Field(default_factory=ScoringWeights)
    thresholds: ReasonThresholds = Field(default_factory=ReasonThresholds)
    include_description: bool = Field(default=True, description="Search job description as well as requirements for skills")
    max_reasons: int = Field(default=3, ge=0, le=10, description="Maximum reasons returned per match")
    max_warnings: int = Field(default=2, ge=0, le=10, description="Maximum warnings returned per match")
