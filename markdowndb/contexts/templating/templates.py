"""
Canonical template strings for MarkdownDB documents.

Each template shows every standard field with an example value. Inline
comments mark required fields and enum choices; they are stripped by the parser.
"""

JOB_TEMPLATE = """<JOB>
TITLE: Senior Cloud Infrastructure Engineer // required
COMPANY: Stellar Innovations Inc. // required
ADDRESS: San Francisco, CA
REMOTE_TYPE: HYBRID // [ONSITE|REMOTE|HYBRID]
SALARY_RANGE_MIN: 100,000
SALARY_RANGE_MAX: 150,000
EMPLOYMENT_TYPE: FULL-TIME // [FULL-TIME|PART-TIME|CONTRACT|INTERNSHIP|COOP]
EXPERIENCE_LEVEL: SENIOR // [ENTRY|MID|SENIOR|LEAD]
POSTED_DATE: 2025-11-15
CLOSING_DATE: 2025-12-31

# DESCRIPTION:
- Design, implement, and maintain scalable cloud infrastructure on AWS/Azure.
- Develop and manage CI/CD pipelines using GitLab or Jenkins.

# REQUIRED_SKILLS: // required
- 7+ years of experience in DevOps or SRE roles.
- Expert-level proficiency with Terraform and Kubernetes.

# PREFERRED_SKILLS:
- Experience with FinOps principles and tooling.

# ABOUT_COMPANY:
- Stellar Innovations is a high-growth Series C FinTech startup.
"""

PROFILE_TEMPLATE = """<PROFILE>
NAME: Place Holder // required
ADDRESS: 123 Main Street, Anytown, CA 45678
EMAIL: name@email.com
// ex: PHONE, WEBSITE, GITHUB

# EDUCATION
## EDU_1
DEGREE: Master of Science in Computer Science // required
SCHOOL: University of Helsinki // required
LOCATION: Helsinki, Finland
START: September 1988
END: March 1997
// ex: GPA

# EXPERIENCE
## EXP_1
TYPE: PROFESSIONAL // required [PROFESSIONAL|PROJECT|VOLUNTEER]
TITLE: Senior Developer // required
AT: Tech Solutions Inc.
START: October 2020
END: ONGOING
BULLETS:
- Built API...
- Led team...

## EXP_2
TYPE: PROJECT // required [PROFESSIONAL|PROJECT|VOLUNTEER]
TITLE: Linux Kernel // required
BULLETS:
- Architected kernel...

# INTERESTS:
- Scuba diving
- Reading
// ex: # CERTIFICATIONS:
"""

TEMPLATES = {
    "job": JOB_TEMPLATE,
    "profile": PROFILE_TEMPLATE,
}


def get_template(kind: str) -> str:
    """
    Get the canonical template for a document kind.

    Args:
        kind: "job" or "profile" (case-insensitive)

    Returns:
        Template text

    Raises:
        ValueError: If kind is unknown
    """
    try:
        return TEMPLATES[kind.lower()]
    except KeyError:
        raise ValueError(f"Unknown template kind '{kind}'. Available: {list(TEMPLATES)}") from None
