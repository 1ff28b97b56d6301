"""Configuration loader."""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv

from ..errors import ConfigError
from ..rules.models import DEFAULT_QUICK_ACTIONS, QuickAction, UrgencyRule
from ..rules.templates import DEFAULT_TEMPLATE, DEFAULT_TEMPLATES
from ..rules.urgency import DEFAULT_URGENCY_RULES
from .models import Config, HistoryConfig, ProviderConfig, UrgencyConfig


def load_config(config_path: str = "config.yaml") -> Config:
    """Load configuration from YAML file and environment."""
    load_dotenv()
    
    # Provider selection and secrets come from the environment
    provider = ProviderConfig(
        gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
        gemini_model=os.getenv("GEMINI_MODEL", "gemini-2.0-flash"),
        ollama_model=os.getenv("OLLAMA_MODEL", ""),
        ollama_host=os.getenv("OLLAMA_HOST") or None,
    )
    
    yaml_config = {}
    config_file = Path(config_path)
    if config_file.exists():
        try:
            with open(config_file, encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
        if not isinstance(yaml_config, dict):
            raise ConfigError(f"{config_path} must contain a mapping at the top level")
    
    categories = yaml_config.get("categories") or None
    urgencies = yaml_config.get("urgencies") or None
    
    quick_actions = [
        QuickAction(label=qa.get("label", "Unnamed"), text=qa.get("text", ""))
        for qa in yaml_config.get("quick_actions") or []
    ] or list(DEFAULT_QUICK_ACTIONS)
    
    # Urgency rules, first match wins
    urgency_data = yaml_config.get("urgency") or {}
    rules = [
        UrgencyRule(
            level=rule_data.get("level", "Low"),
            keywords=rule_data.get("keywords", []),
        )
        for rule_data in urgency_data.get("rules") or []
    ] or list(DEFAULT_URGENCY_RULES)
    urgency = UrgencyConfig(
        rules=rules,
        default_level=urgency_data.get("default", "Low"),
    )
    
    templates = dict(DEFAULT_TEMPLATES)
    templates.update(yaml_config.get("templates") or {})
    
    history_data = yaml_config.get("history") or {}
    history = HistoryConfig(
        path=os.getenv("TRIAGE_HISTORY_PATH") or history_data.get("path", "triage_history.json"),
        key=history_data.get("key", "triageHistory"),
        seed_key=history_data.get("seed_key", "exampleMessage"),
    )
    
    config = Config(
        quick_actions=quick_actions,
        urgency=urgency,
        templates=templates,
        default_template=yaml_config.get("default_template", DEFAULT_TEMPLATE),
        provider=provider,
        history=history,
        log_level=os.getenv("LOG_LEVEL", yaml_config.get("log_level", "WARNING")).upper(),
    )
    if categories:
        config.categories = [str(c) for c in categories]
    if urgencies:
        config.urgencies = [str(u) for u in urgencies]
    return config
