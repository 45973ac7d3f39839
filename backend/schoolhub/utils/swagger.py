# backend/schoolhub/utils/swagger.py
"""Swagger/OpenAPI configuration for the application."""
from flask_swagger_ui import get_swaggerui_blueprint
from schoolhub.models.attendance import AttendanceStatus

# Swagger UI configuration
SWAGGER_URL = '/api/docs'
API_URL = '/api/swagger.json'

def get_swagger_blueprint():
    """Create and return swagger UI blueprint."""
    swaggerui_blueprint = get_swaggerui_blueprint(
        SWAGGER_URL,
        API_URL,
        config={
            'app_name': "SchoolHub Attendance API",
            'defaultModelsExpandDepth': -1,
            'docExpansion': 'list',
            'supportedSubmitMethods': ['get', 'post'],
            'validatorUrl': None,
        }
    )
    return swaggerui_blueprint

def _json(schema_ref: str, description: str) -> dict:
    return {
        "description": description,
        "content": {
            "application/json": {
                "schema": {"$ref": f"#/components/schemas/{schema_ref}"}
            }
        }
    }

def _errors(*codes: str) -> dict:
    descriptions = {
        "400": "Validation error or expired code",
        "401": "Missing or invalid token",
        "403": "Role or enrollment does not allow this action",
        "404": "Class, session or code not found",
        "429": "Too many check-in attempts",
        "503": "No free join code could be allocated",
    }
    return {code: _json("Error", descriptions[code]) for code in codes}

def _id_param(name: str) -> dict:
    return {"name": name, "in": "path", "required": True, "schema": {"type": "integer"}}

def generate_swagger_spec():
    """Generate OpenAPI/Swagger specification."""
    secured = [{"bearerAuth": []}]
    statuses = [status.value for status in AttendanceStatus]

    return {
        "openapi": "3.0.0",
        "info": {
            "title": "SchoolHub Attendance API",
            "description": "Attendance sessions with 6-digit join codes, student check-in and teacher corrections",
            "version": "1.0.0"
        },
        "servers": [
            {
                "url": "http://127.0.0.1:5000/api",
                "description": "Development server"
            }
        ],
        "components": {
            "securitySchemes": {
                "bearerAuth": {
                    "type": "http",
                    "scheme": "bearer",
                    "bearerFormat": "JWT"
                }
            },
            "schemas": {
                "AttendanceRecord": {
                    "type": "object",
                    "properties": {
                        "id": {"type": "integer"},
                        "session_id": {"type": "integer"},
                        "student_id": {"type": "integer"},
                        "status": {"type": "string", "enum": statuses},
                        "is_manual": {"type": "boolean"},
                        "student": {
                            "type": "object",
                            "properties": {
                                "id": {"type": "integer"},
                                "name": {"type": "string"},
                                "email": {"type": "string"}
                            }
                        },
                        "created_at": {"type": "string", "format": "date-time"},
                        "updated_at": {"type": "string", "format": "date-time"}
                    }
                },
                "AttendanceSession": {
                    "type": "object",
                    "properties": {
                        "id": {"type": "integer"},
                        "class_id": {"type": "integer"},
                        "code": {"type": "string", "pattern": "^[0-9]{6}$"},
                        "expires_at": {"type": "string", "format": "date-time"},
                        "is_open": {"type": "boolean"},
                        "records": {
                            "type": "array",
                            "items": {"$ref": "#/components/schemas/AttendanceRecord"}
                        }
                    }
                },
                "Error": {
                    "type": "object",
                    "properties": {
                        "error": {"type": "boolean"},
                        "message": {"type": "string"},
                        "status_code": {"type": "integer"}
                    }
                },
                "Success": {
                    "type": "object",
                    "properties": {
                        "error": {"type": "boolean", "default": False},
                        "message": {"type": "string"},
                        "data": {"type": "object"}
                    }
                }
            }
        },
        "paths": {
            "/attendance/classes/{class_id}/start": {
                "post": {
                    "tags": ["Attendance"],
                    "summary": "Start an attendance session (teacher)",
                    "security": secured,
                    "parameters": [_id_param("class_id")],
                    "responses": {
                        "201": _json("Success", "Session started; data holds code, expires_at and session"),
                        **_errors("401", "403", "404", "503")
                    }
                }
            },
            "/attendance/check-in": {
                "post": {
                    "tags": ["Attendance"],
                    "summary": "Check in with a join code (student)",
                    "security": secured,
                    "requestBody": {
                        "required": True,
                        "content": {
                            "application/json": {
                                "schema": {
                                    "type": "object",
                                    "required": ["code"],
                                    "properties": {
                                        "code": {"type": "string", "pattern": "^[0-9]{6}$"}
                                    }
                                }
                            }
                        }
                    },
                    "responses": {
                        "200": _json("Success", "Attendance recorded"),
                        **_errors("400", "401", "403", "404", "429")
                    }
                }
            },
            "/attendance/sessions/{session_id}/manual": {
                "post": {
                    "tags": ["Attendance"],
                    "summary": "Manually mark a student (teacher)",
                    "security": secured,
                    "parameters": [_id_param("session_id")],
                    "requestBody": {
                        "required": True,
                        "content": {
                            "application/json": {
                                "schema": {
                                    "type": "object",
                                    "required": ["student_id", "status"],
                                    "properties": {
                                        "student_id": {"type": "integer"},
                                        "status": {"type": "string", "enum": statuses}
                                    }
                                }
                            }
                        }
                    },
                    "responses": {
                        "200": _json("Success", "Manual attendance recorded"),
                        **_errors("400", "401", "403", "404")
                    }
                }
            },
            "/attendance/sessions/{session_id}/stop": {
                "post": {
                    "tags": ["Attendance"],
                    "summary": "Stop an attendance session early (teacher)",
                    "security": secured,
                    "parameters": [_id_param("session_id")],
                    "responses": {
                        "200": _json("Success", "Session stopped"),
                        **_errors("401", "403", "404")
                    }
                }
            },
            "/attendance/sessions/{session_id}": {
                "get": {
                    "tags": ["Attendance"],
                    "summary": "Session detail with records (teacher, admin)",
                    "security": secured,
                    "parameters": [_id_param("session_id")],
                    "responses": {
                        "200": _json("Success", "Session detail"),
                        **_errors("401", "403", "404")
                    }
                }
            },
            "/attendance/history": {
                "get": {
                    "tags": ["Attendance"],
                    "summary": "Attendance history (own for students, any student for admins)",
                    "security": secured,
                    "parameters": [
                        {"name": "student_id", "in": "query", "required": False, "schema": {"type": "integer"}}
                    ],
                    "responses": {
                        "200": _json("Success", "Records, newest first"),
                        **_errors("400", "401", "403")
                    }
                }
            },
            "/attendance/classes/{class_id}": {
                "get": {
                    "tags": ["Attendance"],
                    "summary": "All sessions of a class (teacher, admin)",
                    "security": secured,
                    "parameters": [_id_param("class_id")],
                    "responses": {
                        "200": _json("Success", "Class with sessions, newest first"),
                        **_errors("401", "403", "404")
                    }
                }
            }
        }
    }
