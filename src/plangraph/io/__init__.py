"""Loading and saving plan documents."""

from .parser import PlanValidationError, load_plan, normalize_plan_data, plan_to_dict, save_plan

__all__ = ["PlanValidationError", "load_plan", "normalize_plan_data", "plan_to_dict", "save_plan"]
