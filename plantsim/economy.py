# plantsim/economy.py
"""
Ledger
------
Action costs and stage-based daily income. The ledger never refuses an
action for lack of funds; balances simply floor at zero.
"""

from plantsim.state import STAGE_ORDER, PlantState

DEFAULT_COSTS = {
    'water': 2,
    'nutrients': 5,
    'temperature': 3,
    'treat_pests': 10,
    'cut_leaf': 5,
}

DEFAULT_INCOME = {
    'seed': 0,
    'sprout': 3,
    'young': 6,
    'mature': 10,
    'flowering': 15,
}


class Ledger:
    def __init__(self, cfg=None):
        cfg = cfg or {}
        self.costs = dict(DEFAULT_COSTS)
        self.costs.update(cfg.get('costs', {}))
        income = cfg.get('income', DEFAULT_INCOME)
        self.income = {stage: int(income[stage.value]) for stage in STAGE_ORDER}

    def cost(self, action: str) -> int:
        return self.costs[action]

    def charge(self, state: PlantState, action: str):
        state.spend(self.costs[action])

    def can_afford(self, state: PlantState, action: str) -> bool:
        return state.money >= self.costs[action]

    def daily_income(self, state: PlantState) -> int:
        return self.income[state.stage]

    def pay_income(self, state: PlantState) -> int:
        earned = self.daily_income(state)
        state.money += earned
        return earned
