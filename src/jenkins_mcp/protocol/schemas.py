LIST = {
    "trigger_job": {
        "name": "trigger_job",
        "description": "Trigger a Jenkins job by name; optionally pass parameters (map).",
        "input_schema": {
            "type": "object",
            "required": ["job_name"],
            "properties": {
                "job_name": {"type": "string", "description": "job name (required)"},
                "parameters": {
                    "type": ["object", "null"],
                    "description": "optional key/value parameters; null means none",
                    "additionalProperties": True,
                },
            },
        },
    },
    "get_build_status": {
        "name": "get_build_status",
        "description": "Get latest build status for job (returns raw JSON).",
        "input_schema": {
            "type": "object",
            "required": ["job_name"],
            "properties": {
                "job_name": {"type": "string", "description": "job name (required)"},
            },
        },
    },
    "get_console_log": {
        "name": "get_console_log",
        "description": "Get console log for job/build number (build_number required).",
        "input_schema": {
            "type": "object",
            "required": ["job_name", "build_number"],
            "properties": {
                "job_name": {"type": "string", "description": "job name (required)"},
                "build_number": {
                    "type": ["integer", "number", "string"],
                    "description": "build number (required)",
                },
            },
        },
    },
}
