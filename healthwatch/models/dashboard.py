# dashboard models: summary stats, trend points and the overview payload
# recomputed on every read, never persisted

from pydantic import BaseModel, Field

from healthwatch.models.report import ReportResponse


class TrendDataPoint(BaseModel):
    """check-ins on a single calendar day (MM-DD label)"""
    date: str
    count: int


class CategoryCount(BaseModel):
    label: str
    count: int


class StatsSummary(BaseModel):
    """aggregate view shown on the dashboard cards and charts"""
    total: int = 0
    last_7_days: int = Field(0, alias="last7Days")
    unique_regions: int = Field(0, alias="uniqueRegions")
    trend_data: list[TrendDataPoint] = Field(default_factory=list, alias="trendData")
    top_symptoms: list[CategoryCount] = Field(default_factory=list, alias="topSymptoms")
    top_environment: list[CategoryCount] = Field(default_factory=list, alias="topEnvironment")
    mental_health_share: int = Field(0, ge=0, le=100, alias="mentalHealthShare")

    model_config = {"populate_by_name": True}


class DashboardOverview(BaseModel):
    """everything the dashboard tab renders in one response"""
    stats: StatsSummary
    recent: list[ReportResponse] = Field(default_factory=list)
    mental_health_message: str = Field("", alias="mentalHealthMessage")

    model_config = {"populate_by_name": True}
