from __future__ import annotations

import re
import unittest

from schedule_app.ingestion.hockeytech_parser import parse_hockeytech_schedule


def _whl_game(**overrides) -> dict:
    game = {
        "game_id": "1022001",
        "home_team_id": "10",
        "visiting_team_id": "20",
        "home_team_name": "Calgary Hitmen",
        "visiting_team_name": "Red Deer Rebels",
        "home_team_code": "CGY",
        "visiting_team_code": "RD",
        "date_played": "2025-11-01",
        "schedule_time": "19:00:00",
        "venue_name": "Scotiabank Saddledome - Calgary, AB",
        "tickets_url": "https://tickets.example/hitmen",
        "game_status": "7:00 pm MDT",
    }
    game.update(overrides)
    return game


class HockeyTechParserTests(unittest.TestCase):
    def test_final_game_from_flat_whl_fields(self) -> None:
        payload = {
            "Schedule": [
                {
                    "home_team_id": "10",
                    "visiting_team_id": "20",
                    "date_played": "2025-11-01",
                    "schedule_time": "19:00:00",
                    "home_goal_count": "3",
                    "visiting_goal_count": "2",
                    "game_status": "Final",
                }
            ]
        }

        games = parse_hockeytech_schedule(payload, "WHL")

        self.assertEqual(1, len(games))
        game = games[0]
        self.assertEqual(3, game.home_score)
        self.assertEqual(2, game.away_score)
        self.assertEqual("2025-11-01", game.date)
        self.assertEqual("19:00", game.time)
        self.assertEqual("WHL", game.league)
        self.assertEqual("10", game.home_team_id)
        self.assertEqual("https://assets.leaguestat.com/whl/logos/10.png", game.home_logo)
        self.assertEqual("https://assets.leaguestat.com/whl/logos/20.png", game.away_logo)
        self.assertEqual("TBD", game.home_team)
        self.assertEqual("TBD", game.location)
        self.assertFalse(game.overtime)
        self.assertFalse(game.shootout)
        self.assertIsNone(game.link_to_summary)

    def test_scheduled_game_has_no_scores(self) -> None:
        payload = {"SiteKit": {"Schedule": [_whl_game(home_goal_count="0", visiting_goal_count="0")]}}

        game = parse_hockeytech_schedule(payload, "WHL")[0]

        self.assertIsNone(game.home_score)
        self.assertIsNone(game.away_score)
        self.assertEqual("Scotiabank Saddledome", game.location)
        self.assertEqual("Calgary Hitmen", game.home_team)
        self.assertEqual("Red Deer Rebels", game.away_team)
        self.assertEqual("CGY", game.home_tricode)
        self.assertEqual("https://tickets.example/hitmen", game.ticket_link)
        self.assertEqual("https://chl.ca/whl/gamecentre/1022001/", game.link_to_summary)

    def test_zero_score_is_kept_for_completed_game(self) -> None:
        payload = {"Schedule": _whl_game(game_status="Final", home_goal_count="0", visiting_goal_count="4")}

        game = parse_hockeytech_schedule(payload, "WHL")[0]

        self.assertEqual(0, game.home_score)
        self.assertEqual(4, game.away_score)

    def test_overtime_and_shootout_from_status_and_flags(self) -> None:
        payload = [
            _whl_game(game_id="1", game_status="Final/OT", home_goal_count="3", visiting_goal_count="2"),
            _whl_game(game_id="2", game_status="Final/SO", home_goal_count="3", visiting_goal_count="2"),
            _whl_game(game_id="3", game_status="Final", final="1", overtime="1", shootout="0",
                      home_goal_count="1", visiting_goal_count="2"),
            _whl_game(game_id="4", game_status="Final", period="4",
                      home_goal_count="1", visiting_goal_count="2"),
            _whl_game(game_id="5", overtime="1", shootout=1),
        ]

        games = {game.game_id: game for game in parse_hockeytech_schedule(payload, "WHL")}

        self.assertEqual((True, False), (games["1"].overtime, games["1"].shootout))
        self.assertEqual((True, True), (games["2"].overtime, games["2"].shootout))
        self.assertEqual((True, False), (games["3"].overtime, games["3"].shootout))
        self.assertTrue(games["4"].overtime)
        # Not completed, so flags are ignored.
        self.assertEqual((False, False), (games["5"].overtime, games["5"].shootout))
        self.assertIsNone(games["5"].home_score)

    def test_final_flag_marks_completion(self) -> None:
        payload = [_whl_game(game_status="", final=1, home_team_score=5, visiting_team_score="1")]

        game = parse_hockeytech_schedule(payload, "AHL")[0]

        self.assertEqual((5, 1), (game.home_score, game.away_score))
        self.assertEqual("https://theahl.com/stats/game-center/1022001", game.link_to_summary)
        self.assertEqual("https://assets.leaguestat.com/ahl/logos/10.png", game.home_logo)

    def test_iso_timestamp_wins_and_ignores_separate_time(self) -> None:
        payload = [
            _whl_game(
                GameDateISO8601="2025-10-04T19:00:00-06:00",
                date_played="2025-10-05",
                game_time="1300",
            )
        ]

        game = parse_hockeytech_schedule(payload, "WHL")[0]

        self.assertEqual(("2025-10-04", "19:00"), (game.date, game.time))

    def test_packed_game_time_overlays_date(self) -> None:
        payload = [
            {
                "id": 77,
                "game_date": "2025-12-31",
                "game_time": "1830",
                "home_team": {"id": 444, "name": "Wranglers", "code": "CGY"},
                "visiting_team": {"id": 440, "nickname": "Condors", "abbreviation": "BAK"},
            }
        ]

        game = parse_hockeytech_schedule(payload, "AHL")[0]

        self.assertEqual(("2025-12-31", "18:30"), (game.date, game.time))
        self.assertEqual(444, game.home_team_id)
        self.assertEqual(440, game.away_team_id)
        self.assertEqual("Wranglers", game.home_team)
        self.assertEqual("Condors", game.away_team)
        self.assertEqual("BAK", game.away_tricode)
        self.assertEqual(77, game.game_id)

    def test_numeric_team_field_is_used_as_id(self) -> None:
        payload = [_whl_game(home_team_id=None, home_team="215", visiting_team_id=None, visiting_team="Rebels")]

        game = parse_hockeytech_schedule(payload, "WHL")[0]

        self.assertEqual(215, game.home_team_id)
        self.assertIsNone(game.away_team_id)
        self.assertIsNone(game.away_logo)

    def test_numeric_venue_is_resolved_from_venue_directory(self) -> None:
        payload = {
            "SiteKit": {
                "Schedule": [_whl_game(venue_name="31")],
                "Venue": [
                    {"id": "30", "name": "Other Arena"},
                    {"venue_id": 31, "venue_name": "Peavey Mart Centrium - Red Deer, AB"},
                ],
            }
        }

        game = parse_hockeytech_schedule(payload, "WHL")[0]

        self.assertEqual("Peavey Mart Centrium", game.location)

    def test_numeric_venue_prefers_nested_venue_info(self) -> None:
        payload = [_whl_game(venue_name=None, venue=12, venue_info={"name": "Co-op Place"})]

        game = parse_hockeytech_schedule(payload, "WHL")[0]

        self.assertEqual("Co-op Place", game.location)

    def test_unresolved_numeric_venue_is_kept(self) -> None:
        payload = [_whl_game(venue_name="99")]

        self.assertEqual("99", parse_hockeytech_schedule(payload, "WHL")[0].location)

    def test_entries_without_dates_and_null_entries_are_dropped(self) -> None:
        payload = {
            "Schedule": [
                _whl_game(game_id="keep"),
                _whl_game(game_id="no-date", date_played=None),
                _whl_game(game_id="bad-date", date_played="TBD"),
                None,
                "garbage",
            ]
        }

        games = parse_hockeytech_schedule(payload, "WHL")

        self.assertEqual(["keep"], [game.game_id for game in games])

    def test_unparseable_date_falls_through_to_next_field(self) -> None:
        payload = [_whl_game(date_played="TBD", start_time="2025-11-08T20:00:00Z", schedule_time=None)]

        game = parse_hockeytech_schedule(payload, "WHL")[0]

        self.assertEqual(("2025-11-08", "13:00"), (game.date, game.time))

    def test_out_of_range_timestamp_drops_only_that_game(self) -> None:
        payload = {
            "Schedule": [
                _whl_game(game_id="1", GameDateISO8601="0001-01-01T00:30:00+05:00"),
                _whl_game(game_id="2"),
            ]
        }

        games = parse_hockeytech_schedule(payload, "WHL")

        self.assertEqual(["2"], [game.game_id for game in games])

    def test_summary_link_only_for_hockeytech_leagues(self) -> None:
        self.assertIsNotNone(parse_hockeytech_schedule([_whl_game()], "AHL")[0].link_to_summary)
        self.assertIsNone(parse_hockeytech_schedule([_whl_game()], "NHL")[0].link_to_summary)

    def test_malformed_inputs_yield_empty_list(self) -> None:
        for payload in (None, [], {}, {"Schedule": []}, {"SiteKit": {}}, "oops", 42, {"Other": [1]}):
            with self.subTest(payload=payload):
                self.assertEqual([], parse_hockeytech_schedule(payload, "WHL"))

    def test_output_formats_and_idempotence(self) -> None:
        payload = {"Schedule": [_whl_game(game_id=str(i), date_played=f"2025-11-{i:02d}") for i in range(1, 10)]}

        first = parse_hockeytech_schedule(payload, "WHL")
        second = parse_hockeytech_schedule(payload, "WHL")

        self.assertEqual(
            [game.model_dump_json() for game in first],
            [game.model_dump_json() for game in second],
        )
        for game in first:
            self.assertRegex(game.date, re.compile(r"^\d{4}-\d{2}-\d{2}$"))
            self.assertRegex(game.time, re.compile(r"^\d{2}:\d{2}$"))


if __name__ == "__main__":
    unittest.main()
