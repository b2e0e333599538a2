from windsight.data.power_curve import generate_power_curve_samples
from windsight.data.scada_generator import generate_fleet_time_series
from windsight.data.unit_registry import list_units
from windsight.utils.frames import power_curve_frame

df = generate_fleet_time_series(hours=24)
df.to_csv('scada_time_series.csv', index=False)
print(f'[OK] Generated {len(df):,} records saved to scada_time_series.csv')

for unit in list_units():
    path = f'power_curve_unit{unit.id}.csv'
    power_curve_frame(generate_power_curve_samples(unit.id)).to_csv(path, index=False)
    print(f'[OK] {unit.name} power curve saved to {path}')
