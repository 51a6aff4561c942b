"""Track a satellite and the Sun over a few hours on a world map."""

from plan13 import Instant, Observer, Satellite, Tracker, parse_tle

TLE_TEXT = """\
ISS (ZARYA)
1 25544U 98067A   24045.54896019  .00016717  00000-0  30093-3 0  9993
2 25544  51.6412 207.4925 0004948 290.5508 178.9792 15.49583488439596
"""

iss = Satellite(parse_tle(TLE_TEXT)[0])
tracker = Tracker(Observer.create("Home", 48.661563, 9.779416, 386.0), 1150, 609)
print(f"Station on map at {tracker.observer_xy()}")

t = Instant.from_civil(2024, 2, 14, 16, 0, 0)
for _ in range(36):
    tracker.set_time(t)
    r = tracker.track(iss)
    mark = "*" if r.visible else " "
    rx, tx = tracker.doppler(145.800, 437.800)
    print(f"{mark} {t}  lat {r.lat:8.3f} lon {r.lon:9.3f}  az {r.azimuth_deg:6.2f} el {r.elevation_deg:6.2f}"
          f"  map ({r.x:4d},{r.y:3d})  RX {rx:.6f} TX {tx:.6f}")
    t = t.advance(5.0 / 1440.0)

sun = tracker.sun()
print(f"\nSun -> lat {sun.lat:.4f} lon {sun.lon:.4f} az {sun.azimuth_deg:.2f} el {sun.elevation_deg:.2f}")
for i, (x, y) in enumerate(sun.footprint):
    print(f"{i:2d}: x = {x}, y = {y}")
