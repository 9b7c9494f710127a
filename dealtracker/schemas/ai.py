from dealtracker.schemas.base import CamelModel


class GenerateSummaryRequest(CamelModel):
    user_id: int | None = None


class GenerateSummaryResponse(CamelModel):
    ai_summary: str


class MarketResearchRequest(CamelModel):
    industry: str | None = None
    user_id: int | None = None


class MarketReport(CamelModel):
    content: str


class MarketResearchResponse(CamelModel):
    report: MarketReport
