from dealtracker.schemas.base import CamelModel


class DashboardStats(CamelModel):
    total_deals: int = 0
    active_negotiations: int = 0
    total_investment: int = 0
    closed_this_month: int = 0
