"""Quest seed data: categories and quiz content upserted on startup."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from finquest.achievements.service import upsert_insert
from finquest.db.models import Quest, QuestCategory

logger = logging.getLogger(__name__)

CATEGORY_SEED_DATA: list[dict] = [
    {"name": "Budgeting", "description": "Track income, plan spending, live within your means", "icon": "\U0001F4CB", "color": "#4CAF50"},
    {"name": "Saving", "description": "Emergency funds and paying yourself first", "icon": "\U0001F437", "color": "#2196F3"},
    {"name": "Debt", "description": "Interest, payoff strategies and credit", "icon": "\U0001F4B3", "color": "#F44336"},
    {"name": "Investing", "description": "Compounding, diversification and risk", "icon": "\U0001F4C8", "color": "#9C27B0"},
]


def _q(question: str, options: list[str], correct: int, explanation: str) -> dict:
    return {"question": question, "options": options, "correct": correct, "explanation": explanation}


QUEST_SEED_DATA: list[dict] = [
    {
        "slug": "budget-basics",
        "category": "Budgeting",
        "title": "Budget Basics",
        "description": "Learn the building blocks of a monthly budget.",
        "difficulty": "beginner",
        "min_level": 1,
        "xp_reward": 100,
        "gold_reward": 50,
        "stat_rewards": {"discipline": 1},
        "order_index": 1,
        "questions": [
            _q("What is a budget?", ["A plan for your money", "A type of loan", "A bank account", "A tax form"], 0,
               "A budget is a plan for how you will earn, spend and save money."),
            _q("In the 50/30/20 rule, what does the 20% cover?", ["Wants", "Needs", "Savings and debt payoff", "Taxes"], 2,
               "20% of take-home pay goes to savings and extra debt payments."),
            _q("Which of these is a fixed expense?", ["Groceries", "Rent", "Dining out", "Entertainment"], 1,
               "Rent stays the same each month; the others vary."),
            _q("What should you do first when building a budget?", ["Open a credit card", "Track your income and spending", "Buy stocks", "Cut all fun spending"], 1,
               "You cannot plan what you have not measured."),
            _q("A zero-based budget means...", ["You spend nothing", "Every dollar is assigned a job", "You have zero debt", "You save nothing"], 1,
               "Income minus assigned spending and saving equals zero."),
        ],
    },
    {
        "slug": "tracking-spending",
        "category": "Budgeting",
        "title": "Follow the Money",
        "description": "Find where your money actually goes each month.",
        "difficulty": "intermediate",
        "min_level": 3,
        "xp_reward": 150,
        "gold_reward": 75,
        "stat_rewards": {"discipline": 1, "wisdom": 1},
        "order_index": 2,
        "questions": [
            _q("What are 'latte factor' expenses?", ["Large one-off purchases", "Small recurring purchases that add up", "Coffee shop investments", "Tax deductions"], 1,
               "Small daily spending adds up to large yearly totals."),
            _q("Which tool is best for tracking spending?", ["Memory", "A spending log or budgeting app", "Your credit limit", "A savings bond"], 1,
               "Written or app-based tracking is far more reliable than memory."),
            _q("Subscriptions you forgot about are an example of...", ["Fixed income", "Spending leaks", "Assets", "Capital gains"], 1,
               "Forgotten recurring charges leak money every month."),
            _q("How often should you review your budget?", ["Once a year", "Only when broke", "At least monthly", "Never"], 2,
               "Monthly reviews catch drift before it becomes debt."),
            _q("Irregular expenses like car repairs are best handled by...", ["Ignoring them", "Sinking funds", "Payday loans", "Skipping rent"], 1,
               "Setting aside a little each month smooths out irregular costs."),
        ],
    },
    {
        "slug": "emergency-fund",
        "category": "Saving",
        "title": "Rainy Day Fund",
        "description": "Why and how to build an emergency fund.",
        "difficulty": "beginner",
        "min_level": 1,
        "xp_reward": 100,
        "gold_reward": 50,
        "stat_rewards": {"discipline": 1},
        "order_index": 3,
        "questions": [
            _q("How many months of expenses should an emergency fund cover?", ["1 week", "3 to 6 months", "5 years", "None"], 1,
               "Three to six months of essential expenses is the common target."),
            _q("Where should an emergency fund be kept?", ["Stocks", "A high-yield savings account", "Under the mattress", "Crypto"], 1,
               "It must be safe and quickly accessible."),
            _q("Which is a true emergency?", ["A concert ticket sale", "Job loss", "A new phone release", "A vacation deal"], 1,
               "Emergencies are unexpected and necessary expenses."),
            _q("'Pay yourself first' means...", ["Save before you spend", "Give yourself a raise", "Pay bills late", "Spend your bonus"], 0,
               "Move savings out as soon as income arrives."),
            _q("After using your emergency fund you should...", ["Close the account", "Rebuild it", "Invest the rest in lottery tickets", "Take a loan"], 1,
               "Refill the fund so it is ready for the next emergency."),
        ],
    },
    {
        "slug": "debt-avalanche",
        "category": "Debt",
        "title": "Slay the Debt Dragon",
        "description": "Compare payoff strategies and understand interest.",
        "difficulty": "intermediate",
        "min_level": 2,
        "xp_reward": 150,
        "gold_reward": 75,
        "stat_rewards": {"discipline": 1, "negotiation": 1},
        "order_index": 4,
        "questions": [
            _q("The avalanche method pays off which debt first?", ["Smallest balance", "Highest interest rate", "Newest debt", "Oldest debt"], 1,
               "Targeting the highest rate minimizes total interest paid."),
            _q("The snowball method pays off which debt first?", ["Smallest balance", "Highest interest rate", "Largest balance", "Mortgage"], 0,
               "Quick wins on small balances build momentum."),
            _q("Paying only the minimum on a credit card...", ["Clears it quickly", "Maximizes interest paid", "Improves APR", "Is always best"], 1,
               "Minimum payments stretch the debt out and maximize interest."),
            _q("APR stands for...", ["Annual Percentage Rate", "Average Payment Ratio", "Approved Purchase Return", "Annual Principal Reduction"], 0,
               "APR is the yearly cost of borrowing."),
            _q("Which can lower your interest rate?", ["Missing payments", "Calling your lender to negotiate", "Opening many cards", "Maxing out cards"], 1,
               "Lenders often reduce rates for customers in good standing who ask."),
        ],
    },
    {
        "slug": "credit-scores",
        "category": "Debt",
        "title": "The Credit Oracle",
        "description": "What moves your credit score and why it matters.",
        "difficulty": "advanced",
        "min_level": 5,
        "xp_reward": 200,
        "gold_reward": 100,
        "stat_rewards": {"wisdom": 1, "negotiation": 1},
        "order_index": 5,
        "questions": [
            _q("Which factor weighs most in a FICO score?", ["Payment history", "Credit mix", "New credit", "Income"], 0,
               "Payment history is about 35% of the score."),
            _q("A good credit utilization ratio is below...", ["90%", "75%", "30%", "100%"], 2,
               "Keeping utilization under 30% is widely recommended."),
            _q("Closing your oldest card can...", ["Raise your score", "Shorten your credit history", "Erase debt", "Lower taxes"], 1,
               "Average account age drops when old accounts close."),
            _q("A hard inquiry happens when...", ["You check your own score", "A lender reviews your credit for a loan", "You pay a bill", "You get paid"], 1,
               "Applications trigger hard inquiries; self-checks do not."),
            _q("Credit scores range from...", ["0 to 100", "300 to 850", "1 to 10", "500 to 1000"], 1,
               "FICO scores run from 300 to 850."),
        ],
    },
    {
        "slug": "compound-interest",
        "category": "Investing",
        "title": "The Eighth Wonder",
        "description": "Harness compound interest over time.",
        "difficulty": "advanced",
        "min_level": 5,
        "xp_reward": 200,
        "gold_reward": 100,
        "stat_rewards": {"wisdom": 2},
        "order_index": 6,
        "questions": [
            _q("Compound interest is interest earned on...", ["Principal only", "Principal and past interest", "Taxes", "Fees"], 1,
               "Interest earns interest, which accelerates growth."),
            _q("The Rule of 72 estimates...", ["Retirement age", "How long money takes to double", "Tax brackets", "Loan fees"], 1,
               "72 divided by the annual rate approximates the doubling time."),
            _q("Which matters most for compounding?", ["Time", "Luck", "Brand of bank", "Account color"], 0,
               "Starting early gives compounding the most time to work."),
            _q("At 8% a year, money doubles in roughly...", ["3 years", "9 years", "20 years", "50 years"], 1,
               "72 / 8 = 9 years."),
            _q("Compounding also works against you with...", ["Savings accounts", "High-interest debt", "Index funds", "Bonds"], 1,
               "Unpaid credit card interest compounds too."),
        ],
    },
    {
        "slug": "diversification",
        "category": "Investing",
        "title": "Portfolio Architect",
        "description": "Spread risk with diversification and asset allocation.",
        "difficulty": "expert",
        "min_level": 10,
        "xp_reward": 300,
        "gold_reward": 150,
        "stat_rewards": {"risk_tolerance": 2, "wisdom": 1},
        "order_index": 7,
        "questions": [
            _q("Diversification primarily reduces...", ["All risk", "Unsystematic (specific) risk", "Inflation", "Taxes"], 1,
               "Spreading holdings removes single-company risk, not market risk."),
            _q("An index fund tracks...", ["One stock", "A market index", "Gold prices", "Interest rates"], 1,
               "Index funds hold the components of an index."),
            _q("Rebalancing means...", ["Selling everything", "Restoring your target allocation", "Buying only winners", "Timing the market"], 1,
               "Periodically trimming winners and adding to laggards keeps risk on target."),
            _q("Bonds generally have ___ than stocks.", ["Higher risk and return", "Lower risk and return", "No risk", "Guaranteed returns"], 1,
               "Bonds trade lower expected returns for lower volatility."),
            _q("An expense ratio is...", ["A fund's annual fee", "A tax rate", "A dividend", "A loan rate"], 0,
               "Lower expense ratios leave more return for investors."),
        ],
    },
]


async def seed_quests(db: AsyncSession) -> int:
    """Upsert quest categories and quests. Returns number of quests seeded."""
    insert = upsert_insert(db)

    for data in CATEGORY_SEED_DATA:
        stmt = insert(QuestCategory).values(**data)
        stmt = stmt.on_conflict_do_update(
            index_elements=["name"],
            set_={
                "description": stmt.excluded.description,
                "icon": stmt.excluded.icon,
                "color": stmt.excluded.color,
            },
        )
        await db.execute(stmt)

    result = await db.execute(select(QuestCategory.name, QuestCategory.id))
    category_ids = {name: category_id for name, category_id in result}

    seeded = 0
    for data in QUEST_SEED_DATA:
        values = {k: v for k, v in data.items() if k != "category"}
        values["category_id"] = category_ids[data["category"]]
        stmt = insert(Quest).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=["slug"],
            set_={
                "category_id": stmt.excluded.category_id,
                "title": stmt.excluded.title,
                "description": stmt.excluded.description,
                "difficulty": stmt.excluded.difficulty,
                "min_level": stmt.excluded.min_level,
                "xp_reward": stmt.excluded.xp_reward,
                "gold_reward": stmt.excluded.gold_reward,
                "questions": stmt.excluded.questions,
                "stat_rewards": stmt.excluded.stat_rewards,
                "order_index": stmt.excluded.order_index,
            },
        )
        await db.execute(stmt)
        seeded += 1

    await db.commit()
    logger.info("Seeded %d quest categories and %d quests", len(CATEGORY_SEED_DATA), seeded)
    return seeded
