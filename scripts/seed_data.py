from dealtracker.db.database import SessionLocal
from dealtracker.models import (
    ActivityLog,
    BusinessUnit,
    Comment,
    Deal,
    DealTag,
    Resource,
    Tag,
    User,
)


def _avatar(name: str, background: str) -> str:
    return f"https://ui-avatars.com/api/?name={name.replace(' ', '+')}&background={background}&color=fff"


def seed_database():
    """Load a small demo data set into an empty database"""
    db = SessionLocal()

    if db.query(Deal).count() > 0:
        print("Database already contains deals, skipping seed")
        db.close()
        return

    print("Adding users...")
    # Passwords are placeholders; the API never returns them
    jsmith = User(username="jsmith", password="password123", full_name="John Smith",
                  email="jsmith@company.com", role="bizdev", avatar_url=_avatar("John Smith", "0747A6"))
    mlee = User(username="mlee", password="password123", full_name="Michelle Lee",
                email="mlee@company.com", role="lead", avatar_url=_avatar("Michelle Lee", "36B37E"))
    agarcia = User(username="agarcia", password="password123", full_name="Alex Garcia",
                   email="agarcia@company.com", role="executive", avatar_url=_avatar("Alex Garcia", "253858"))
    db.add_all([jsmith, mlee, agarcia])

    print("Adding business units...")
    enterprise = BusinessUnit(name="Enterprise Solutions", color="#0747A6")
    growth = BusinessUnit(name="Growth & Startups", color="#36B37E")
    partnerships = BusinessUnit(name="Strategic Partnerships", color="#FFC400")
    db.add_all([enterprise, growth, partnerships])

    print("Adding tags...")
    tags = {name: Tag(name=name) for name in
            ["High Priority", "Healthcare", "Enterprise", "Startup", "International"]}
    db.add_all(tags.values())
    db.flush()

    print("Adding deals...")
    acme = Deal(
        company="Acme Health Systems", website="https://acmehealth.example.com",
        internal_contact="Sarah Jones", business_unit_id=enterprise.id, deal_type="Partnership",
        investment_size=250000, use_case="Implementing our platform across their hospital network",
        lead_owner_id=jsmith.id, stage="Negotiation", custom_field_values={},
        notes="Currently finalizing terms of the partnership agreement. They are looking to deploy "
              "to 5 hospitals initially with potential expansion to their entire network of 23 facilities.",
    )
    techstart = Deal(
        company="TechStart Innovation", website="https://techstart.example.com",
        internal_contact="David Wilson", business_unit_id=growth.id, deal_type="Investment",
        investment_size=150000, use_case="Series A funding for AI-driven analytics platform",
        lead_owner_id=mlee.id, stage="Initial Contact", custom_field_values={},
        notes="Promising early-stage startup with novel approach to predictive analytics. "
              "First meeting scheduled for next week.",
    )
    logistics = Deal(
        company="Global Logistics Corp", website="https://globallogistics.example.com",
        internal_contact="Robert Chen", business_unit_id=partnerships.id, deal_type="Partnership",
        investment_size=500000, use_case="Joint venture for supply chain optimization",
        lead_owner_id=agarcia.id, stage="Proposal", custom_field_values={},
        notes="Presented initial proposal last week. They are interested in our technology for "
              "optimizing their international shipping routes.",
    )
    meditech = Deal(
        company="MediTech Solutions", website="https://meditech.example.com",
        internal_contact="Karen Patel", business_unit_id=enterprise.id, deal_type="Partnership",
        investment_size=350000, use_case="Integration of medical devices with our platform",
        lead_owner_id=jsmith.id, stage="Due Diligence", custom_field_values={},
        notes="Technical teams are evaluating integration possibilities. Initial tests are positive.",
    )
    innovate = Deal(
        company="InnovateCo", website="https://innovate.example.com",
        internal_contact="Lisa Wong", business_unit_id=growth.id, deal_type="Investment",
        investment_size=75000, use_case="Seed funding for consumer app development",
        lead_owner_id=mlee.id, stage="Closed Won", custom_field_values={},
        notes="Agreement signed last month. Initial funding provided. Regular check-ins scheduled.",
    )
    db.add_all([acme, techstart, logistics, meditech, innovate])
    db.flush()

    print("Adding tags to deals...")
    for deal, tag_name in [
        (acme, "Healthcare"), (acme, "Enterprise"), (techstart, "Startup"),
        (logistics, "High Priority"), (logistics, "International"),
        (meditech, "Healthcare"), (innovate, "Startup"),
    ]:
        db.add(DealTag(deal_id=deal.id, tag_id=tags[tag_name].id))

    print("Adding resources...")
    db.add_all([
        Resource(deal_id=acme.id, name="Partnership Agreement",
                 url="https://documents.example.com/partnership-123", type="link"),
        Resource(deal_id=acme.id, name="Technical Requirements",
                 url="https://documents.example.com/tech-specs-123", type="link"),
        Resource(deal_id=logistics.id, name="Joint Venture Proposal",
                 url="https://documents.example.com/proposal-456", type="link"),
    ])

    print("Adding comments...")
    db.add_all([
        Comment(deal_id=acme.id, user_id=jsmith.id,
                content="Had a great meeting with their CTO today. They're excited about the integration possibilities."),
        Comment(deal_id=acme.id, user_id=mlee.id,
                content="Legal has reviewed the initial terms and has a few questions about data security."),
        Comment(deal_id=logistics.id, user_id=agarcia.id,
                content="Their executive team is visiting our office next month for a demo."),
    ])

    print("Adding activity logs...")
    db.add_all([
        ActivityLog(deal_id=acme.id, user_id=jsmith.id, action="Stage Changed",
                    details={"from": "Proposal", "to": "Negotiation"}),
        ActivityLog(deal_id=techstart.id, user_id=mlee.id, action="Created deal",
                    details={"company": "TechStart Innovation"}),
        ActivityLog(deal_id=innovate.id, user_id=mlee.id, action="Deal Closed",
                    details={"amount": "$75,000"}),
    ])

    db.commit()
    db.close()
    print("Database seeding completed!")


if __name__ == "__main__":
    seed_database()
