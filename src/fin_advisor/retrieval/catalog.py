"""Static financial knowledge base used for local retrieval."""

from __future__ import annotations

from fin_advisor.types import Document

KNOWLEDGE_BASE: tuple[Document, ...] = (
    Document(
        doc_id="doc-1",
        title="Introduction to Financial Planning",
        source_id="Financial Planning Guide 2024",
        url="https://example.com/financial-planning-guide",
        text=(
            "Financial planning is the process of creating a comprehensive strategy for "
            "managing your finances to achieve your life goals. It involves analyzing your "
            "current financial situation, setting financial objectives, and developing a plan "
            "to reach those objectives. A good financial plan includes budgeting, saving, "
            "investing, insurance, and retirement planning. Key steps include: 1) Assessing "
            "your current financial situation, 2) Setting SMART financial goals, 3) Creating a "
            "budget, 4) Developing an investment strategy, 5) Managing risk through insurance, "
            "and 6) Regular review and adjustment of your plan."
        ),
    ),
    Document(
        doc_id="doc-2",
        title="Investment Diversification Strategies",
        source_id="Modern Portfolio Theory Guide",
        url="https://example.com/diversification",
        text=(
            "Investment diversification is a risk management strategy that mixes a wide "
            "variety of investments within a portfolio. The rationale is that a portfolio of "
            "different asset types will, on average, yield higher long-term returns and lower "
            "risk. Diversification strategies include: Asset Class Diversification (stocks, "
            "bonds, real estate, commodities), Geographic Diversification (domestic and "
            "international markets), Sector Diversification (technology, healthcare, finance), "
            "and Market Cap Diversification (large-cap, mid-cap, small-cap stocks). A common "
            "rule of thumb is the 60/40 portfolio (60% stocks, 40% bonds) but this should be "
            "adjusted based on age, risk tolerance, and goals."
        ),
    ),
    Document(
        doc_id="doc-3",
        title="Understanding Risk Tolerance in Investing",
        source_id="Investor Psychology Handbook",
        url="https://example.com/risk-tolerance",
        text=(
            "Risk tolerance is the degree of variability in investment returns that an "
            "investor is willing to withstand. It depends on: Age (younger investors can "
            "typically handle more risk), Time Horizon (longer timelines allow for more risk), "
            "Financial Situation (income stability and savings), Investment Goals (growth vs. "
            "preservation), and Emotional Capacity (how you react to losses). Risk profiles "
            "typically fall into: Conservative (mostly bonds and cash, 20-30% stocks), Moderate "
            "(balanced approach, 50-60% stocks), Aggressive (growth-focused, 80-90% stocks). "
            "Understanding your risk tolerance is crucial before selecting investments."
        ),
    ),
    Document(
        doc_id="doc-4",
        title="Comprehensive Retirement Planning Guide",
        source_id="Retirement Strategies 2024",
        url="https://example.com/retirement-planning",
        text=(
            "Retirement planning requires determining retirement income goals and executing "
            "strategies to achieve them. Key retirement accounts include: 401(k) - "
            "Employer-sponsored with potential matching, contribution limit $23,000 (2024), "
            "Traditional IRA - Tax-deductible contributions, contribution limit $7,000 (2024), "
            "Roth IRA - Tax-free withdrawals in retirement, same contribution limits as "
            "traditional IRA, and SEP IRA for self-employed. The rule of thumb suggests saving "
            "10-15% of pre-tax income, starting as early as possible. The power of compound "
            "interest means starting at 25 vs 35 can result in 2-3x more retirement savings."
        ),
    ),
    Document(
        doc_id="doc-5",
        title="Building an Emergency Fund",
        source_id="Personal Finance Essentials",
        url="https://example.com/emergency-fund",
        text=(
            "An emergency fund is a cash reserve for unexpected expenses like medical bills, "
            "car repairs, or job loss. Financial experts recommend 3-6 months of essential "
            "living expenses. Calculate your target: add up monthly essentials (rent or "
            "mortgage, utilities, food, insurance, minimum debt payments) and multiply by 3-6. "
            "Where to keep it: high-yield savings account, money market account, or a "
            "short-term CD ladder. Do not invest emergency funds in stocks or volatile assets. "
            "Build it gradually: start with $1,000, then aim for one month of expenses, then "
            "build to 3-6 months."
        ),
    ),
    Document(
        doc_id="doc-6",
        title="Tax-Efficient Investing Strategies",
        source_id="Tax Planning for Investors",
        url="https://example.com/tax-strategies",
        text=(
            "Tax-advantaged investing strategies can significantly impact your wealth "
            "accumulation. Key strategies: 1) Maximize 401(k) contributions especially to get "
            "the full employer match, 2) Use Roth vs Traditional IRA strategically - Roth if "
            "expecting a higher tax bracket in retirement, Traditional for an immediate tax "
            "deduction, 3) Tax-loss harvesting - selling losing investments to offset capital "
            "gains, 4) Hold investments longer than 1 year for long-term capital gains rates, "
            "5) Use an HSA (Health Savings Account) as a stealth retirement account with a "
            "triple tax advantage."
        ),
    ),
    Document(
        doc_id="doc-7",
        title="Asset Allocation Fundamentals",
        source_id="Portfolio Construction Manual",
        url="https://example.com/asset-allocation",
        text=(
            "Asset allocation is the implementation of an investment strategy that balances "
            "risk and reward by dividing assets among different categories. Common frameworks: "
            "Age-based rule: subtract your age from 110 (or 120) to get the stock percentage. "
            "Three-fund portfolio: total US stock market fund, total international stock fund, "
            "total bond market fund. Risk-based allocation: Conservative (30% stocks, 70% "
            "bonds), Moderate (60% stocks, 40% bonds), Aggressive (90% stocks, 10% bonds). "
            "Rebalancing is crucial - review quarterly and rebalance annually or when the "
            "allocation drifts 5% or more from target."
        ),
    ),
    Document(
        doc_id="doc-8",
        title="Investment Fees and Their Impact",
        source_id="Cost-Conscious Investing Guide",
        url="https://example.com/investment-fees",
        text=(
            "Understanding investment fees is critical as they compound against you over time. "
            "Types of fees: Expense Ratios (annual fee as a percentage of assets, index funds "
            "around 0.03-0.20%, active funds around 0.50-2.00%), Trading Commissions (most "
            "brokers now charge $0 for stocks and ETFs), Management Fees (financial advisors "
            "typically 0.5-1.5% of AUM), and Load Fees (sales charges on mutual funds). Over 30 "
            "years, a 1% fee can reduce your final portfolio value by 25%. Use low-cost index "
            "funds, avoid load funds, and minimize trading."
        ),
    ),
    Document(
        doc_id="doc-9",
        title="Dollar-Cost Averaging Strategy",
        source_id="Investment Timing Strategies",
        url="https://example.com/dollar-cost-averaging",
        text=(
            "Dollar-cost averaging (DCA) is an investment strategy where you invest a fixed "
            "amount regularly regardless of market conditions. Benefits: reduces timing risk, "
            "lowers the average cost per share over time, removes emotion from investing, and "
            "is easy to automate. Example: investing $500/month buys more shares when prices "
            "are low and fewer when high. This is built into 401(k) contributions. For most "
            "people receiving regular income, DCA is the practical approach."
        ),
    ),
    Document(
        doc_id="doc-10",
        title="ESG and Sustainable Investing",
        source_id="Responsible Investment Guide",
        url="https://example.com/esg-investing",
        text=(
            "ESG investing (Environmental, Social, and Governance) integrates ethical "
            "considerations into investment decisions. ESG factors: Environmental (climate "
            "change impact, renewable energy, waste management), Social (labor practices, "
            "diversity, community relations), Governance (board diversity, executive "
            "compensation, shareholder rights). Approaches: negative screening, positive "
            "screening, and ESG integration alongside financial metrics."
        ),
    ),
    Document(
        doc_id="opt-1",
        title="Credit Spreads: Bull Put and Bear Call Strategies",
        source_id="Options Income Playbook",
        url="https://example.com/options/credit-spreads",
        text=(
            "A credit spread sells one option and buys a further out-of-the-money option of "
            "the same type and expiration, collecting a net premium. A bull put spread sells a "
            "higher-strike put and buys a lower-strike put; it profits when the underlying "
            "stays above the short strike. A bear call spread sells a lower-strike call and "
            "buys a higher-strike call; it profits when the underlying stays below the short "
            "strike. Maximum profit is the credit received, and maximum loss is the width of "
            "the strikes minus the credit. Credit spreads have defined risk, benefit from "
            "time decay, and are typically opened 30-45 days to expiration."
        ),
    ),
    Document(
        doc_id="opt-2",
        title="Covered Calls for Portfolio Income",
        source_id="Options Income Playbook",
        url="https://example.com/options/covered-calls",
        text=(
            "A covered call sells a call option against 100 shares of stock you already own. "
            "The premium provides income and a small cushion against declines, while the "
            "upside is capped at the strike price. Covered calls suit neutral to mildly "
            "bullish outlooks. Choosing a strike 5-10% above the current price balances "
            "premium against the chance of the shares being called away. Assignment risk "
            "rises near ex-dividend dates."
        ),
    ),
    Document(
        doc_id="opt-3",
        title="Protective Puts as Portfolio Insurance",
        source_id="Hedging Handbook",
        url="https://example.com/options/protective-puts",
        text=(
            "A protective put buys a put option on a stock you hold, setting a floor on "
            "losses below the strike price for the life of the option. The cost of the put is "
            "the insurance premium. Investors use protective puts ahead of earnings or during "
            "volatile markets. A collar pairs the protective put with a covered call to offset "
            "the premium in exchange for capped upside."
        ),
    ),
    Document(
        doc_id="opt-4",
        title="Iron Condors in Range-Bound Markets",
        source_id="Options Income Playbook",
        url="https://example.com/options/iron-condors",
        text=(
            "An iron condor combines a bull put spread and a bear call spread on the same "
            "underlying and expiration. It collects premium from both sides and profits when "
            "the underlying stays between the short strikes. Risk is defined on each side by "
            "the width of the wings. Iron condors work best when implied volatility is high "
            "and expected to fall, and they require active management if price approaches a "
            "short strike."
        ),
    ),
    Document(
        doc_id="opt-5",
        title="The Option Greeks Explained",
        source_id="Derivatives Primer",
        url="https://example.com/options/greeks",
        text=(
            "The Greeks measure an option's sensitivity to market factors. Delta measures "
            "price change per $1 move in the underlying. Gamma measures how fast delta "
            "changes. Theta measures time decay per day, which benefits option sellers. Vega "
            "measures sensitivity to implied volatility. Rho measures sensitivity to interest "
            "rates. Traders combine the Greeks to understand how a position behaves as price, "
            "time and volatility change."
        ),
    ),
)


def load_catalog() -> tuple[Document, ...]:
    """Return the built-in knowledge base."""
    return KNOWLEDGE_BASE
