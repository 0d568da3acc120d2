"""
Alert wording: dispatch messages, the on-screen alert banner and
operating recommendations for each risk band.
"""

from typing import Dict


def alert_message(level: str, mine_name: str) -> str:
    if level == "High":
        return f"CRITICAL ALERT: High rockfall risk detected at {mine_name}. Immediate evacuation required."
    if level == "Medium":
        return f"WARNING: Medium rockfall risk at {mine_name}. Enhanced monitoring activated."
    if level == "Low":
        return f"ADVISORY: Low rockfall risk detected at {mine_name}. Continue monitoring."
    return f"INFO: Risk status update for {mine_name}."


def auto_alert_message(mine_name: str) -> str:
    return f"HIGH RISK ALERT: Rockfall risk detected at {mine_name}. Immediate evacuation recommended."


RECOMMENDATIONS = {
    "High": "Immediate evacuation recommended. Halt all mining operations in the area.",
    "Medium": "Increased monitoring required. Consider restricting access to high-risk zones.",
    "Low": "Continue normal operations with regular monitoring.",
    "Safe": "Current conditions are stable. Maintain routine safety protocols.",
}


def recommendation(level: str) -> str:
    return RECOMMENDATIONS.get(level, "Insufficient data for recommendation.")


def alert_banner(level: str) -> Dict:
    """
    Content of the pop-up alert for a risk band

    Returns:
        Dictionary with title, message and a list of actions
    """
    if level == "High":
        return {
            "title": "CRITICAL ALERT: HIGH ROCKFALL RISK DETECTED",
            "message": "Immediate evacuation required. All personnel must leave the area immediately.",
            "actions": [
                "Evacuate all personnel from the danger zone",
                "Stop all mining operations immediately",
                "Contact emergency services",
                "Activate emergency response protocol",
            ],
        }
    if level == "Medium":
        return {
            "title": "WARNING: ELEVATED ROCKFALL RISK",
            "message": "Increased monitoring and caution required in the specified area.",
            "actions": [
                "Increase monitoring frequency",
                "Restrict access to high-risk zones",
                "Review safety protocols",
                "Prepare contingency measures",
            ],
        }
    return {
        "title": "ADVISORY: ROCKFALL RISK DETECTED",
        "message": "Continue operations with enhanced monitoring.",
        "actions": [
            "Maintain standard safety protocols",
            "Monitor conditions closely",
            "Brief personnel on current conditions",
        ],
    }


def format_elapsed(seconds: int) -> str:
    """Seconds as MM:SS"""
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes:02d}:{secs:02d}"
