from __future__ import annotations

import os

import keyring

SERVICE = "jira-search"
TOKEN_ENV = "JIRA_SEARCH_TOKEN"


def keychain_account(profile_name: str, jira_base_url: str) -> str:
    # one token per site
    return f"{profile_name}::{jira_base_url}".lower()


def save_token(profile_name: str, jira_base_url: str, token: str) -> None:
    keyring.set_password(SERVICE, keychain_account(profile_name, jira_base_url), token)


def load_token(profile_name: str, jira_base_url: str) -> str | None:
    """
    JIRA_SEARCH_TOKEN wins over the keychain so CI jobs need no keyring backend.
    """
    env_token = os.environ.get(TOKEN_ENV, "").strip()
    if env_token:
        return env_token
    return keyring.get_password(SERVICE, keychain_account(profile_name, jira_base_url))
