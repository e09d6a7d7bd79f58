"""Outbound notifications for new leads."""
import requests
from flask import current_app

LABELS = {
    "whitepaper": "Whitepaper download",
    "playbook": "Playbook download",
}


def notify_slack_lead(category: str, name: str, email: str, company: str, asset_title: str | None) -> None:
    """Post a short message to Slack when a lead is submitted. Logs errors, does not raise."""
    webhook_url = (current_app.config.get("SLACK_WEBHOOK_URL") or "").strip()
    if not webhook_url:
        return
    label = LABELS.get(category, "Resource download")
    text = "New lead: *{}* <{}> ({}) – {}".format(name, email, company, label)
    if asset_title:
        text += ": {}".format(asset_title)
    try:
        r = requests.post(
            webhook_url,
            json={"text": text},
            headers={"Content-Type": "application/json"},
            timeout=5,
        )
        if r.status_code != 200:
            current_app.logger.warning("Slack webhook failed: HTTP %s – %s", r.status_code, (r.text or "")[:200])
    except requests.RequestException as e:
        current_app.logger.warning("Slack notify error: %s", e)
