from typing import Any, Dict, List


def empty_resume_fields(summary: str = "") -> Dict[str, Any]:
    """Placeholder resume structure with every section empty."""
    return {
        "personalInfo": {"fullName": "", "email": "", "phone": "", "summary": summary},
        "experience": [],
        "education": [],
        "skills": {"technical": [], "soft": []},
        "projects": [],
        "certifications": [],
    }


def ensure_list_of_dicts(x: Any) -> list:
    """Coerce input into a list of dicts where possible."""
    if x is None:
        return []
    if isinstance(x, dict):
        # maybe stored as single object
        return [x]
    if isinstance(x, list):
        out = []
        for item in x:
            if isinstance(item, dict):
                out.append(item)
            else:
                # strings or primitives -> try to wrap
                out.append({"name": item})
        return out
    # primitive (str/int) -> wrap
    return [{"name": x}]


def _skill_name(s: Any) -> Any:
    if isinstance(s, dict):
        return s.get("name") or s.get("skill") or ""
    return s


def normalize_skills(skills: Any) -> Dict[str, list]:
    """Normalize skills to the {technical: [...], soft: [...]} map."""
    if skills is None:
        return {"technical": [], "soft": []}
    if isinstance(skills, dict):
        out: Dict[str, list] = {}
        for cat, vals in skills.items():
            if isinstance(vals, list):
                out[cat] = [_skill_name(v) for v in vals]
            elif vals is None:
                out[cat] = []
            else:
                out[cat] = [_skill_name(vals)]
        out.setdefault("technical", [])
        out.setdefault("soft", [])
        return out
    if isinstance(skills, list):
        # a flat list carries no category; treat it as technical
        return {"technical": [_skill_name(s) for s in skills], "soft": []}
    # fallback
    return {"technical": [skills], "soft": []}


def normalize_projects(projects: Any) -> list:
    if projects is None:
        return []
    if isinstance(projects, dict):
        return [projects]
    if isinstance(projects, list):
        out = []
        for p in projects:
            if isinstance(p, dict):
                # some models use 'title' instead of 'name'
                if "name" not in p and "title" in p:
                    p["name"] = p.get("title")
                out.append(p)
            else:
                out.append({"name": p})
        return out
    return [{"name": projects}]


def normalize_certifications(certifications: Any) -> List[Any]:
    if certifications is None:
        return []
    if isinstance(certifications, list):
        return certifications
    return [certifications]


_CONTACT_FIELDS = ("fullName", "email", "phone", "summary")


def _as_text(value: Any) -> Any:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, list):
        return " ".join(str(v) for v in value if v is not None)
    return str(value)


def normalize_personal_info(pi: Any) -> dict:
    if not pi:
        return {}
    if isinstance(pi, dict):
        # contact fields are plain strings; models sometimes split names into lists
        return {k: _as_text(v) if k in _CONTACT_FIELDS else v for k, v in pi.items()}
    # primitive
    return {"fullName": str(pi)}


_NORMALIZERS = {
    "personalInfo": normalize_personal_info,
    "experience": ensure_list_of_dicts,
    "education": ensure_list_of_dicts,
    "skills": normalize_skills,
    "projects": normalize_projects,
    "certifications": normalize_certifications,
}


def normalize_resume_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    """Coerce loosely shaped resume data (usually model output) into the
    shapes the resume models expect. Only sections present in `data` are
    touched; unknown keys are passed through."""
    out = dict(data)
    for key, fn in _NORMALIZERS.items():
        if key in out:
            out[key] = fn(out[key])
    if "accessibility" in out and not isinstance(out["accessibility"], dict):
        out["accessibility"] = {}
    return out
