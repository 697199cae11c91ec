"""
Deterministic normalization rules.

Every header string ever seen in the visitor sheet lives here, together with
the canonical column order and the date formats we accept. Nothing in this
module is computed at runtime.
"""

from typing import Dict, List

TARGET_ENCODING = "utf-8"
CSV_DELIMITERS = [",", ";", "\t", "|"]

# Alias lists per logical field, newest schema first. The "?" variants are
# headers that were mangled by a lossy export and are kept verbatim.
HEADER_ALIASES: Dict[str, List[str]] = {
    "timestamp": ["Timestamp", "timestamp"],
    "entry_number": ['"Entry Number"', "Entry Number", "entryNumber"],
    "manual_entry_number": [
        "मॅन्युअल नोंदणी एंट्री नंबर",
        "???????? ?????? ?????? ????",
        "Manual Entry Number",
        "manualEntryNumber",
    ],
    "arrival_time": ["आगमन का समय", "???? ?? ???", "Arrival Time", "arrivalTime"],
    "name": [
        '"आपका नाम क्या है?"',
        "आपका नाम क्या है?",
        '"???? ??? ???? ???"',
        "???? ??? ???? ???",
        "Name",
    ],
    "male": ["आप कितने आदमी हैं?", "?? ????? ???? ????", "Male"],
    "female": ["आप कितने महिलाएं है?", "?? ????? ??????? ???", "Female"],
    "children": ["कितने बच्चे आएं हैं?", "????? ????? ??? ????", "Children"],
    "address": ["अतिथिगणों का स्थायी पता?", "????????? ?? ?????? ????", "Address"],
    "pin_code": ["PinCode", "Pincode", "pinCode"],
    "state": ["State"],
    "mobile": ["मोबाइल नंबर?", "?????? ?????", "Mobile"],
    "whatsapp": ["Whasapp no (Y/N)", "Whatsapp no (Y/N)", "Whatsapp"],
    "from_where": ["कहा से आये है आप?", "??? ?? ??? ?? ???", "From Where", "fromWhere"],
    "purpose": ["यात्री के आने का उद्देश्य", "?????? ?? ??? ?? ????????", "Purpose"],
    "destination": ["कहा जाना है", "??? ???? ??", "Destination"],
    "exit_date": [
        "जाने की तारीख",
        "???? ?? ?????",
        "???? ?? ????? (date)",
        "Exit Date",
        "exitDate",
    ],
    "photo": [
        "आपकी फ़ोटो",
        "???? ????",
        "???? ???? (optional URL string)",
        "Photo",
    ],
    "e_card": ["ई कार्ड नम्बर", "? ????? ?????", "E Card Number", "eCard"],
    "income_card": [
        "आय कार्ड की फ़ोटो",
        "?? ????? ?? ????",
        "?? ????? ?? ???? (optional URL string)",
        "Income Card Photo",
        "incomeCard",
    ],
    "other_income_card": [
        "और आय कार्ड की फ़ोटो",
        "?? ?? ????? ?? ????",
        "Other Income Card Photo",
        "otherIncomeCard",
    ],
    "room_number": ["रूम या अलमारी नम्बर", "??? ?? ?????? ?????", "Room Number", "roomNumber"],
    "email": ["Email address", "Email"],
    "total_travellers": [
        "सभी यात्रियों की संख्या",
        "??? ????????? ?? ??????",
        "Total Travellers",
        "totalTravellers",
    ],
    "staying_travellers": [
        "यात्री संख्या जो रह रहे है",
        "?????? ?????? ?? ?? ??? ??",
        "Staying Travellers",
        "stayingTravellers",
    ],
    "gender_summary": [
        "पुरुष, महिला, बच्चे, एकुन लोग",
        "?????, ?????, ?????, ???? ???",
        "Gender Summary",
        "genderSummary",
    ],
    "occupancy_status": ["Occupied/Empty", "Status", "occupancyStatus"],
}

# Column order of the canonical sheet; used for positional fallback and for
# the row we append when recording a new entry.
HEADER_ORDER: List[str] = [
    "entry_number",
    "manual_entry_number",
    "timestamp",
    "arrival_time",
    "name",
    "male",
    "female",
    "children",
    "address",
    "pin_code",
    "state",
    "mobile",
    "whatsapp",
    "from_where",
    "purpose",
    "destination",
    "exit_date",
    "photo",
    "e_card",
    "income_card",
    "other_income_card",
    "room_number",
    "email",
    "total_travellers",
    "staying_travellers",
    "gender_summary",
    "occupancy_status",
]

COUNT_FIELDS = ["male", "female", "children", "total_travellers", "staying_travellers"]
DATE_FIELDS = ["timestamp", "exit_date"]

# Spreadsheet serial dates count days from this epoch (25569 == 1970-01-01).
SERIAL_EPOCH = (1899, 12, 30)

# Tried in order after strict ISO parsing. Day-first always precedes
# month-first so 01/02/2024 reads as 1 February.
DATE_FORMATS: List[str] = [
    "%d/%m/%Y",
    "%d-%m-%Y",
    "%d/%m/%Y %H:%M",
    "%d/%m/%Y %H:%M:%S",
    "%d/%m/%Y %I:%M %p",
    "%d-%m-%Y %H:%M",
    "%d-%m-%Y %H:%M:%S",
    "%d-%m-%Y %I:%M %p",
    "%Y-%m-%d",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %I:%M %p",
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%dT%H:%M:%S",
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %I:%M %p",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %I:%M %p",
    "%m-%d-%Y",
    "%m-%d-%Y %H:%M",
    "%m-%d-%Y %I:%M %p",
    "%d %b %Y",
    "%b %d, %Y",
    "%B %d, %Y",
]

DATE_LABEL_FORMAT = "%d %b %Y"
SHEET_DATE_FORMAT = "%d/%m/%Y"
SHEET_TIME_FORMAT = "%H:%M:%S"

# Occupancy
DEFAULT_STAY_DAYS = 6
VACANT_STATUSES = {"empty", "vacant"}

# Label used when a record has no state/address/origin to rank by.
UNKNOWN_LABEL = "अज्ञात"
RANKING_LIMIT = 10
