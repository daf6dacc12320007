from sinceonearth.reference.airports import AirportDirectory
from sinceonearth.stats.aggregator import aggregate_trips
from sinceonearth.stats.routes import summarize_routes


def test_segments_sorted_by_count_then_code():
    routes = {('DEL', 'BOM'): 1, ('BOM', 'DEL'): 3, ('AMD', 'DEL'): 1}

    route_map = summarize_routes(routes)

    assert [(s.from_code, s.to_code, s.count) for s in route_map.routes] == [
        ('BOM', 'DEL', 3),
        ('AMD', 'DEL', 1),
        ('DEL', 'BOM', 1),
    ]


def test_airport_nodes_cover_each_resolvable_code_once():
    route_map = summarize_routes({('DEL', 'BOM'): 2, ('BOM', 'DEL'): 1})

    assert [n.code for n in route_map.airports] == ['BOM', 'DEL']
    delhi = route_map.airports[1]
    assert delhi.city == 'New Delhi'
    assert (delhi.latitude, delhi.longitude) == (28.5562, 77.1000)


def test_unknown_codes_keep_their_segment_but_get_no_node():
    route_map = summarize_routes({('ZZZ', 'DEL'): 1})

    assert len(route_map.routes) == 1
    assert [n.code for n in route_map.airports] == ['DEL']


def test_empty_directory_gives_segments_without_nodes():
    route_map = summarize_routes({('DEL', 'BOM'): 2}, AirportDirectory({}))

    assert route_map.to_dict() == {
        'routes': [{'from': 'DEL', 'to': 'BOM', 'count': 2}],
        'airports': [],
    }


def test_to_dict_from_aggregated_trips():
    stats = aggregate_trips([
        {'from': 'DEL', 'to': 'BOM'},
        {'from': 'BOM', 'to': 'DEL'},
    ])

    data = summarize_routes(stats.routes).to_dict()

    assert {(r['from'], r['to'], r['count']) for r in data['routes']} == {
        ('DEL', 'BOM', 1),
        ('BOM', 'DEL', 1),
    }
    assert data['airports'][0] == {
        'code': 'BOM',
        'lat': 19.0896,
        'lng': 72.8656,
        'city': 'Mumbai',
        'country': 'India',
    }


def test_empty_routes():
    assert summarize_routes({}).to_dict() == {'routes': [], 'airports': []}
