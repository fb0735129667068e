import streamlit as st
import plotly.graph_objects as go
from plotly.subplots import make_subplots
import pandas as pd
import numpy as np

from catalog import default_catalog
from climate import Earth, damage_table
from condition import describe
from forecast import project, summarize_projection
from rating import rating_summary
from seed import load_countries
from simulation import WorldSimulation

# Page configuration
st.set_page_config(
    page_title="Save The World Dashboard",
    page_icon="🌍",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown("""
<style>
    .main-header {
        font-size: 2.5rem;
        font-weight: bold;
        color: #1f77b4;
        text-align: center;
        margin-bottom: 1rem;
    }
</style>
""", unsafe_allow_html=True)

st.markdown('<p class="main-header">🌍 Save The World Dashboard</p>', unsafe_allow_html=True)
st.markdown("**Climate/economy simulation**: enact policies for a country and see where it is heading")

catalog = default_catalog()
countries = load_countries()
countries_by_name = {c.name: c for c in countries}

# Sidebar - Simulation Parameters
st.sidebar.header("Simulation Parameters")

country_name = st.sidebar.selectbox("Country", sorted(countries_by_name))
years_to_run = st.sidebar.slider("Years to simulate first", min_value=0, max_value=50, value=0, step=1)
horizon = st.sidebar.slider("Projection Horizon (years)", min_value=10, max_value=100, value=50, step=5)
emission_scale = st.sidebar.slider("Global Emissions (% of current)", min_value=0, max_value=300,
                                   value=100, step=10,
                                   help="Constant aggregate emissions assumed for the projection") / 100.0

st.sidebar.markdown("---")
st.sidebar.subheader("Policies")
policy_names = st.sidebar.multiselect(
    "Enact (in order)",
    [p.name for p in catalog.policies],
    help="Policies are enacted in this order before the simulation runs; unavailable ones are reported"
)
level_ups = st.sidebar.slider("Level-ups per enacted policy", min_value=0, max_value=3, value=0, step=1)

if st.sidebar.button("Run Simulation", type="primary"):
    with st.spinner("Simulating..."):
        country = countries_by_name[country_name]
        world = WorldSimulation(Earth(), countries, catalog)
        messages = []
        for name in policy_names:
            result = world.enact_policy(country.country_code, name)
            messages.append(result.message)
            for _ in range(level_ups if result.ok else 0):
                messages.append(world.level_up_policy(country.country_code, name).message)

        results = world.run(years_to_run)
        emissions = world.aggregate_emissions * emission_scale
        projection = project(world.country(country.country_code), world.earth,
                             world.earth.current_year + horizon, emissions)

        st.session_state.results = results
        st.session_state.projection = projection
        st.session_state.world = world
        st.session_state.code = country.country_code
        st.session_state.messages = messages

if "projection" in st.session_state:
    world = st.session_state.world
    projection = st.session_state.projection
    country = world.country(st.session_state.code)
    summary = summarize_projection(projection)

    for message in st.session_state.messages:
        st.info(message)

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Temperature", f"{world.earth.current_temperature:.2f}°C",
                  delta=f"{summary['temperature_change']:+.2f}°C by {int(projection['Year'].iloc[-1])}",
                  delta_color="inverse")
    with col2:
        st.metric("CO2", f"{world.earth.current_concentration:.1f} ppm")
    with col3:
        st.metric("Wealth per capita", f"${projection['Wealth_Per_Capita'].iloc[0]:.2f}/day",
                  delta=f"{summary['wealth_change_pct']:+.1f}%")
    with col4:
        st.metric("Country Points", f"{country.country_points}")

    tab_proj, tab_world, tab_policies, tab_damage, tab_data = st.tabs([
        "📈 Projection", "🌐 World", "🏛️ Policies", "🔥 Climate Damage", "📋 Data"
    ])

    with tab_proj:
        fig = make_subplots(
            rows=2, cols=2,
            subplot_titles=("Temperature (°C)", "Wealth per Capita (US$/day)",
                            "Emissions per Capita (tC)", "Gini / EDI"),
            vertical_spacing=0.15,
            specs=[[{"secondary_y": False}, {"secondary_y": False}],
                   [{"secondary_y": False}, {"secondary_y": True}]]
        )
        fig.add_trace(go.Scatter(x=projection["Year"], y=projection["Temperature"], name="Temperature",
                                 line=dict(color='#d62728', width=3)), row=1, col=1)
        fig.add_trace(go.Scatter(x=projection["Year"], y=projection["Wealth_Per_Capita"], name="Wealth",
                                 line=dict(color='#2ca02c', width=3)), row=1, col=2)
        fig.add_trace(go.Scatter(x=projection["Year"], y=projection["Emissions_Per_Capita"],
                                 name="Emissions", line=dict(color='#7f7f7f', width=3),
                                 fill='tozeroy', fillcolor='rgba(127, 127, 127, 0.1)'), row=2, col=1)
        fig.add_trace(go.Scatter(x=projection["Year"], y=projection["Gini"], name="Gini",
                                 line=dict(color='#9467bd', width=2)), row=2, col=2)
        fig.add_trace(go.Scatter(x=projection["Year"], y=projection["EDI"], name="EDI",
                                 line=dict(color='#1f77b4', width=2, dash='dot')),
                      row=2, col=2, secondary_y=True)
        fig.update_layout(height=700, hovermode='x unified')
        st.plotly_chart(fig, use_container_width=True)

        st.subheader("Ratings")
        now = rating_summary(country)
        end = rating_summary(country.forecast(int(projection["Year"].iloc[-1]), world.earth))
        st.dataframe(pd.DataFrame({"Now": now, "End (constant climate)": end}), use_container_width=True)

    with tab_world:
        results = st.session_state.results
        if len(results) > 1:
            fig_world = make_subplots(specs=[[{"secondary_y": True}]])
            fig_world.add_trace(go.Scatter(x=results["Year"], y=results["Concentration"], name="CO2 (ppm)",
                                           line=dict(color='#ff7f0e', width=3)), secondary_y=False)
            fig_world.add_trace(go.Scatter(x=results["Year"], y=results["Global_Emissions"],
                                           name="Emissions (GtC)", line=dict(color='#7f7f7f', width=2)),
                                secondary_y=True)
            fig_world.update_layout(height=450, hovermode='x unified')
            st.plotly_chart(fig_world, use_container_width=True)
        else:
            st.info("Simulate at least one year to see the world history.")
        st.dataframe(world.country_frame(), use_container_width=True)
        st.subheader("Earth log")
        for message in world.last_log_messages(10):
            st.text(message)

    with tab_policies:
        st.subheader("Active policies")
        for policy in country.active_policies:
            with st.expander(f"{policy.name} (level {policy.level}, upgrade: {policy.upgrade_cost} pts)"):
                st.write(policy.description)
                st.text(policy.effect_description())
        st.subheader("Enactable now")
        for policy in country.enactable_policies(world.catalog):
            with st.expander(f"{policy.name} ({policy.category.value}, {policy.base_cost} pts)"):
                st.write(policy.description)
                st.text(policy.effect_description())
                st.caption(describe(policy.condition))

    with tab_damage:
        table = damage_table()
        bands = pd.DataFrame(table, columns=["Low", "High", "GDP", "Gini", "Budget"])
        labels = [f"{low:.2f}-{high:.2f}" for low, high in zip(bands["Low"], bands["High"])]
        fig_damage = go.Figure()
        fig_damage.add_trace(go.Bar(x=labels, y=bands["GDP"], name="GDP %/year", marker_color='#d62728'))
        fig_damage.add_trace(go.Bar(x=labels, y=bands["Gini"] * 10, name="Gini ×10 pts/year",
                                    marker_color='#9467bd'))
        fig_damage.update_layout(barmode='group', height=400, xaxis_title="Temperature rise (°C)")
        st.plotly_chart(fig_damage, use_container_width=True)
        rise = world.earth.temperature_rise
        band = int(np.searchsorted(table[:, 1], rise, side="right")) if rise >= 0 else None
        band_label = ""
        if band is not None and band < len(labels):
            band_label = f" (band {labels[band]})"
        st.markdown(f"Current rise: **{rise:.2f}°C**{band_label}")
        st.text(world.earth.effect_description)

    with tab_data:
        st.dataframe(projection, use_container_width=True)
        st.download_button("Download projection CSV", projection.to_csv(index=False),
                           file_name="projection.csv", mime="text/csv")
else:
    st.info("👈 Choose a country and policies in the sidebar, then click **Run Simulation**")
