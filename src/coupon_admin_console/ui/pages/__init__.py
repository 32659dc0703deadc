from .agent_home import AgentHomePage
from .agents import AgentsPage
from .change_password import ChangePasswordPage
from .config_rules import ConfigRulesPage
from .coupons import AdminCouponsPage, AgentCouponsPage
from .dashboard import DashboardPage
from .login import LoginPage
from .orders import AdminOrdersPage, AgentOrdersPage

__all__ = [
    "AdminCouponsPage",
    "AdminOrdersPage",
    "AgentCouponsPage",
    "AgentHomePage",
    "AgentOrdersPage",
    "AgentsPage",
    "ChangePasswordPage",
    "ConfigRulesPage",
    "DashboardPage",
    "LoginPage",
]
