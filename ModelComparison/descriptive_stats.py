import pandas as pd
from scipy.stats import chi2_contingency, f_oneway, mannwhitneyu

from config import CONTINUOUS_COLUMNS, NOMINAL_COLUMN, ORDINAL_COLUMN, TARGET


# Numeric summary, class balance and category frequency tables
def describe_dataset(df):
    summary = df[CONTINUOUS_COLUMNS].describe().T.round(3)
    balance = df[TARGET].value_counts().sort_index()
    fuel_counts = pd.crosstab(df[NOMINAL_COLUMN], df[TARGET], margins=True)
    size_counts = pd.crosstab(df[ORDINAL_COLUMN], df[TARGET], margins=True)

    print("\n=== Dataset Summary ===")
    print(summary)
    print("\nClass balance:")
    print(balance)
    print(f"\nSuccess rate: {df[TARGET].mean():.3f}")

    return {
        'summary': summary,
        'balance': balance,
        'fuel_counts': fuel_counts,
        'size_counts': size_counts
    }


def hypothesis_tests(df, alpha=0.05):
    """
    Association of every feature with the outcome.

    Categorical features: chi-square test of independence against status.
    Continuous features: Mann-Whitney U between the two outcome groups, and
    one-way ANOVA across fuel types.
    """
    rows = []

    for col in [NOMINAL_COLUMN, ORDINAL_COLUMN]:
        table = pd.crosstab(df[col], df[TARGET])
        table = table.loc[table.sum(axis=1) > 0]
        if table.shape[0] < 2 or table.shape[1] < 2:
            continue
        stat, p_value, _, _ = chi2_contingency(table)
        rows.append((col, 'chi-square vs status', stat, p_value))

    success = df[df[TARGET] == 1]
    failure = df[df[TARGET] == 0]
    for col in CONTINUOUS_COLUMNS:
        if len(success) and len(failure):
            stat, p_value = mannwhitneyu(success[col], failure[col], alternative='two-sided')
            rows.append((col, 'Mann-Whitney U by status', stat, p_value))

        groups = [g[col].to_numpy() for _, g in df.groupby(NOMINAL_COLUMN, observed=True)]
        groups = [g for g in groups if len(g) > 0]
        if len(groups) > 1:
            stat, p_value = f_oneway(*groups)
            rows.append((col, 'ANOVA by fuel', stat, p_value))

    results = pd.DataFrame(rows, columns=['feature', 'test', 'statistic', 'p_value'])
    results['significant'] = results['p_value'] < alpha

    print("\n=== Hypothesis Tests ===")
    print(results.round(4).to_string(index=False))
    return results
