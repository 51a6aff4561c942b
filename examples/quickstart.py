"""plan13 Quickstart: parse a TLE and point an antenna at the ISS."""

from plan13 import Direction, Instant, Observer, Satellite, parse_tle

# ISS (ZARYA) TLE
tle_text = """
ISS (ZARYA)
1 25544U 98067A   24045.54896019  .00016717  00000-0  30093-3 0  9993
2 25544  51.6412 207.4925 0004948 290.5508 178.9792 15.49583488439596
""".strip()

# Parse it
iss = Satellite(parse_tle(tle_text)[0])
home = Observer.create("Home", 48.661563, 9.779416, 386.0)

t = Instant.from_civil(2024, 2, 14, 18, 0, 0)
state = iss.predict(t)
lat, lon = iss.latlon()
el, az = iss.elaz(home)

print(f"Satellite: {iss.name}")
print(f"NORAD ID:  {iss.elements.norad_id}")
print(f"Epoch:     {iss.elements.epoch}")
print(f"Time:      {t}")
print(f"Sub-point: {lat:.4f} {lon:.4f}")
print(f"Az/El:     {az:.2f}° / {el:.2f}°")
print(f"Orbit:     {state.orbit_number}")
print(f"RX:        {iss.doppler(145.800, Direction.DOWNLINK):.6f} MHz")
print(f"TX:        {iss.doppler(437.800, Direction.UPLINK):.6f} MHz")
