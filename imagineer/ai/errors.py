from __future__ import annotations


def describe_backend_error(exc: BaseException) -> str:
    """Turn an SDK exception into the reason shown to the user."""
    message = str(exc).strip() or exc.__class__.__name__
    lowered = message.lower()
    if "api key not valid" in lowered or "invalid api key" in lowered or "incorrect api key" in lowered:
        detail = "The API key configured on the server is invalid. Please check the environment variables."
    elif "permission denied" in lowered:
        detail = (
            "The API key is missing necessary permissions, or the generative AI API is not enabled "
            "for this project."
        )
    elif "billing" in lowered:
        detail = "There is a billing issue with the AI provider account. Please ensure billing is enabled."
    else:
        detail = message
    return f"An error occurred while communicating with the AI service. Details: {detail}"
