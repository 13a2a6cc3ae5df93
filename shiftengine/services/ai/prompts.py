"""
Prompt construction for shift request extraction.
"""

import json


RESPONSE_SCHEMA = {
    "parsedRequests": [
        {
            "date": "YYYY-MM-DD",
            "timeSlots": [{"startTime": "HH:MM", "endTime": "HH:MM"}],
            "type": "work | off | available",
            "priority": "high | medium | low",
            "notes": "string or empty",
            "confidence": "float 0.0-1.0",
        }
    ],
    "processingNotes": "string or empty",
}

EXAMPLES = [
    {
        "input": "8/1 13時-17時",
        "output": {
            "parsedRequests": [
                {
                    "date": "{year}-08-01",
                    "timeSlots": [{"startTime": "13:00", "endTime": "17:00"}],
                    "type": "work",
                    "priority": "medium",
                    "notes": "",
                    "confidence": 0.9,
                }
            ],
            "processingNotes": "",
        },
    },
    {
        "input": "8/2 絶対休み",
        "output": {
            "parsedRequests": [
                {
                    "date": "{year}-08-02",
                    "timeSlots": [],
                    "type": "off",
                    "priority": "high",
                    "notes": "",
                    "confidence": 0.9,
                }
            ],
            "processingNotes": "",
        },
    },
]


def build_system_prompt(year: int) -> str:
    """System prompt: extraction rules, response schema and examples for a reference year."""

    examples_text = ""
    for ex in EXAMPLES:
        output = json.dumps(ex["output"], ensure_ascii=False, indent=2).replace("{year}", str(year))
        examples_text += f"  Input: \"{ex['input']}\"\n"
        examples_text += f"  Output: {output}\n\n"

    return f"""You are the AI for a Japanese shift management system.
Convert employees' free-form shift requests into structured JSON.

Reference year: {year}

RULES:
- Dates: "8/1" -> "{year}-08-01". Use the reference year.
- Times: "13時-17時" -> startTime "13:00", endTime "17:00". Use HH:MM 24-hour format.
- Type: 休み / × / OFF -> "off" with empty timeSlots, a time range -> "work", ○ / 出勤可能 -> "available" with empty timeSlots.
- Priority: 絶対 / 必ず / どうしても -> "high", 希望 -> "medium", どちらでも / 可能なら -> "low".
- confidence is your certainty in the extraction, between 0.0 and 1.0.
- Lines without a date produce no request.
- Respond ONLY with valid JSON matching the schema below. No markdown, no explanation.

SCHEMA:
```json
{json.dumps(RESPONSE_SCHEMA, ensure_ascii=False, indent=2)}
```

EXAMPLES:
{examples_text}"""


def build_user_prompt(input_text: str) -> str:
    return f"""Input: "{input_text}"

Convert this request into the JSON format above. Respond with JSON only."""
