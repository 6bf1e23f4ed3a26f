"""Sample grants used as the fallback catalog when the document store is empty."""

from grant_matcher.core.domain_models import GrantProgramDetails

SAMPLE_GRANTS = [
    GrantProgramDetails(
        program_name="SME Digitalisation Grant",
        eligibility_criteria=(
            "Malaysian-owned SME, operating for at least 6 months, annual sales of RM50,000."
        ),
        funding_amount=(
            "Up to RM5,000 matching grant for digital marketing, e-commerce, and HR payroll systems."
        ),
        application_deadline="2024-12-31",
        sectors="All sectors",
        location="Nationwide",
    ),
    GrantProgramDetails(
        program_name="Technology Development Fund (TDF)",
        eligibility_criteria=(
            "Company incorporated in Malaysia, at least 51% Malaysian-owned, focus on technology"
            " development and commercialisation."
        ),
        funding_amount="Up to RM500,000",
        application_deadline="Open throughout the year",
        sectors="Technology, ICT, Biotechnology, Advanced Materials",
        location="Nationwide",
    ),
    GrantProgramDetails(
        program_name="Penang Business Continuity Zero-Interest Loan",
        eligibility_criteria="Business registered in Penang, in operation before March 2020.",
        funding_amount="Up to RM50,000 interest-free loan.",
        application_deadline="Subject to availability of funds",
        sectors="Tourism, Retail, Manufacturing",
        location="Penang",
    ),
]
