STORAGE_KEY   = "fifa-reports"
APP_TITLE     = "FIFA Matchday Reports"

STATUS_COMPLETED = "completed"
STATUS_ISSUES    = "issues"
STATUSES         = (STATUS_COMPLETED, STATUS_ISSUES)
STATUS_LABELS    = {STATUS_COMPLETED: "Completed", STATUS_ISSUES: "Has Issues"}
STATUS_COLORS    = {STATUS_COMPLETED: "#28a745", STATUS_ISSUES: "#dc3545"}

FUNCTIONAL_AREAS = (
    "Ticketing Office",
    "Security Control Room",
    "Media Center",
    "VIP Lounge",
    "VVIP Lounge",
    "First Aid Station",
    "Broadcast Compound",
    "Team Dressing Rooms",
    "Referee Dressing Room",
    "Stadium Lighting",
    "Sound System",
    "Field Condition",
    "Parking Areas",
    "Concession Stands",
    "Emergency Exits",
)

TOURNAMENTS = [
    "FIFA World Cup 2026",
    "Qualifiers",
    "Friendlies",
    "Nations League",
    "Confederation Cup",
]
DEFAULT_TOURNAMENT = TOURNAMENTS[0]

ATTENDANCE_FIELDS = {
    "spectators":            "Spectators",
    "vip_guests":            "VIP Guests",
    "vvip_guests":           "VVIP Guests",
    "media_representatives": "Media Representatives",
    "photographers":         "Photographers",
}
REQUIRED_FIELDS = ("match_number", "final_score", "venue_manager_name")

# Fields the Reports search box looks into
SEARCH_FIELDS = ("match_number", "home_team", "away_team", "stadium", "venue_manager_name")
RECENT_REPORTS = 3
