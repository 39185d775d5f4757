from dbinspect.core.schemas import PromptCatalog, PromptTemplate


# -----------------------------------------------------------------------------
# PROMPTS MODULE - Canned analytical queries
# Purpose: static templates grouped by difficulty tier
# Why: placeholders such as {schema}, {table} and {column} are left for the
#      caller to fill in; nothing here is ever formatted or mutated
# -----------------------------------------------------------------------------

BASIC = (
    PromptTemplate(
        name="Table Overview",
        description="Get basic statistics about a table",
        query="SELECT COUNT(*) as row_count FROM {schema}.{table}",
    ),
    PromptTemplate(
        name="Column Statistics",
        description="Get statistics for a numerical column",
        query=(
            "SELECT MIN({column}) as min_value, MAX({column}) as max_value, "
            "AVG({column}) as avg_value, STDDEV({column}) as std_dev "
            "FROM {schema}.{table}"
        ),
    ),
    PromptTemplate(
        name="Top Values",
        description="Get the most frequent values in a column",
        query=(
            "SELECT {column}, COUNT(*) as frequency FROM {schema}.{table} "
            "GROUP BY {column} ORDER BY frequency DESC LIMIT 10"
        ),
    ),
    PromptTemplate(
        name="Time Series Analysis",
        description="Group data by time period",
        query=(
            "SELECT DATE_TRUNC('{period}', {timestamp_column}) as time_period, "
            "COUNT(*) FROM {schema}.{table} "
            "GROUP BY time_period ORDER BY time_period"
        ),
    ),
)

INTERMEDIATE = (
    PromptTemplate(
        name="Correlation Analysis",
        description="Calculate correlation between two numerical columns",
        query="SELECT CORR({column1}, {column2}) as correlation FROM {schema}.{table}",
    ),
    PromptTemplate(
        name="Percentile Analysis",
        description="Calculate percentiles for a column",
        query=(
            "SELECT\n"
            "  PERCENTILE_CONT(0.25) WITHIN GROUP (ORDER BY {column}) as percentile_25,\n"
            "  PERCENTILE_CONT(0.5) WITHIN GROUP (ORDER BY {column}) as median,\n"
            "  PERCENTILE_CONT(0.75) WITHIN GROUP (ORDER BY {column}) as percentile_75\n"
            "FROM {schema}.{table}"
        ),
    ),
    PromptTemplate(
        name="Cohort Analysis",
        description="Basic cohort analysis template",
        query=(
            "WITH cohorts AS (\n"
            "  SELECT\n"
            "    user_id,\n"
            "    DATE_TRUNC('month', first_activity_date) as cohort_month,\n"
            "    DATE_TRUNC('month', activity_date) as activity_month\n"
            "  FROM {schema}.{table}\n"
            ")\n"
            "SELECT\n"
            "  cohort_month,\n"
            "  (DATE_PART('year', activity_month) - DATE_PART('year', cohort_month)) * 12 +\n"
            "  (DATE_PART('month', activity_month) - DATE_PART('month', cohort_month)) as months_since_cohort,\n"
            "  COUNT(DISTINCT user_id) as active_users\n"
            "FROM cohorts\n"
            "GROUP BY 1, 2\n"
            "ORDER BY 1, 2"
        ),
    ),
)

ADVANCED = (
    PromptTemplate(
        name="Retention Analysis",
        description="Calculate user retention rates",
        query=(
            "WITH cohort_items AS (\n"
            "  SELECT\n"
            "    user_id,\n"
            "    DATE_TRUNC('month', first_purchase_date) as cohort_month,\n"
            "    DATE_TRUNC('month', purchase_date) as purchase_month\n"
            "  FROM {schema}.{table}\n"
            "),\n"
            "cohort_size AS (\n"
            "  SELECT cohort_month, COUNT(DISTINCT user_id) as num_users\n"
            "  FROM cohort_items\n"
            "  GROUP BY 1\n"
            "),\n"
            "retention AS (\n"
            "  SELECT\n"
            "    c.cohort_month,\n"
            "    (DATE_PART('year', c.purchase_month) - DATE_PART('year', c.cohort_month)) * 12 +\n"
            "    (DATE_PART('month', c.purchase_month) - DATE_PART('month', c.cohort_month)) as months_since_cohort,\n"
            "    COUNT(DISTINCT c.user_id) as num_users\n"
            "  FROM cohort_items c\n"
            "  GROUP BY 1, 2\n"
            ")\n"
            "SELECT\n"
            "  r.cohort_month,\n"
            "  s.num_users as cohort_size,\n"
            "  r.months_since_cohort,\n"
            "  r.num_users as retained_users,\n"
            "  ROUND(r.num_users::NUMERIC / s.num_users, 2) as retention_rate\n"
            "FROM retention r\n"
            "JOIN cohort_size s ON r.cohort_month = s.cohort_month\n"
            "ORDER BY 1, 3"
        ),
    ),
    PromptTemplate(
        name="Funnel Analysis",
        description="Analyze conversion through different stages",
        query=(
            "WITH stages AS (\n"
            "  SELECT\n"
            "    user_id,\n"
            "    MAX(CASE WHEN stage = 'stage1' THEN 1 ELSE 0 END) as reached_stage1,\n"
            "    MAX(CASE WHEN stage = 'stage2' THEN 1 ELSE 0 END) as reached_stage2,\n"
            "    MAX(CASE WHEN stage = 'stage3' THEN 1 ELSE 0 END) as reached_stage3,\n"
            "    MAX(CASE WHEN stage = 'stage4' THEN 1 ELSE 0 END) as reached_stage4\n"
            "  FROM {schema}.{table}\n"
            "  GROUP BY user_id\n"
            ")\n"
            "SELECT\n"
            "  COUNT(*) as total_users,\n"
            "  SUM(reached_stage1) as stage1_count,\n"
            "  SUM(reached_stage2) as stage2_count,\n"
            "  SUM(reached_stage3) as stage3_count,\n"
            "  SUM(reached_stage4) as stage4_count,\n"
            "  ROUND(SUM(reached_stage1)::NUMERIC / COUNT(*), 2) as stage1_rate,\n"
            "  ROUND(SUM(reached_stage2)::NUMERIC / SUM(reached_stage1), 2) as stage1_to_stage2_rate,\n"
            "  ROUND(SUM(reached_stage3)::NUMERIC / SUM(reached_stage2), 2) as stage2_to_stage3_rate,\n"
            "  ROUND(SUM(reached_stage4)::NUMERIC / SUM(reached_stage3), 2) as stage3_to_stage4_rate,\n"
            "  ROUND(SUM(reached_stage4)::NUMERIC / COUNT(*), 2) as overall_conversion\n"
            "FROM stages"
        ),
    ),
    PromptTemplate(
        name="RFM Analysis",
        description="Calculate Recency, Frequency, Monetary metrics",
        query=(
            "WITH rfm AS (\n"
            "  SELECT\n"
            "    customer_id,\n"
            "    CURRENT_DATE - MAX(purchase_date) as recency,\n"
            "    COUNT(order_id) as frequency,\n"
            "    SUM(amount) as monetary\n"
            "  FROM {schema}.{table}\n"
            "  WHERE purchase_date >= CURRENT_DATE - INTERVAL '1 year'\n"
            "  GROUP BY customer_id\n"
            "),\n"
            "rfm_quartiles AS (\n"
            "  SELECT\n"
            "    customer_id,\n"
            "    recency,\n"
            "    frequency,\n"
            "    monetary,\n"
            "    NTILE(4) OVER (ORDER BY recency DESC) as r_quartile,\n"
            "    NTILE(4) OVER (ORDER BY frequency) as f_quartile,\n"
            "    NTILE(4) OVER (ORDER BY monetary) as m_quartile\n"
            "  FROM rfm\n"
            ")\n"
            "SELECT\n"
            "  customer_id,\n"
            "  recency,\n"
            "  frequency,\n"
            "  monetary,\n"
            "  r_quartile,\n"
            "  f_quartile,\n"
            "  m_quartile,\n"
            "  CONCAT(r_quartile, f_quartile, m_quartile) as rfm_score\n"
            "FROM rfm_quartiles\n"
            "ORDER BY rfm_score DESC"
        ),
    ),
)

PROMPT_CATALOG = PromptCatalog(basic=BASIC, intermediate=INTERMEDIATE, advanced=ADVANCED)


def get_prompts() -> PromptCatalog:
    """Return the static catalog. Also used as a route dependency."""
    return PROMPT_CATALOG
