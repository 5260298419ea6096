"""Console UI for cardquiz application."""

import requests

from cli.api_client import CardQuizAPIClient


class ConsoleUI:
    """Console user interface for cardquiz application."""

    def __init__(self, client: CardQuizAPIClient):
        self.client = client

    def print_question(self, question: dict):
        """Print the card to identify."""
        print('\n' + '=' * 60)
        grade = f" (grade {question['grade']})" if question.get('grade') else ''
        print(f"CARD{grade}")
        print(f"  Image: {question['img'] or '(no image)'}")
        print(f"  Pool: {question['pool_size']} cards | misses on this card: {question['miss_count']}")
        print('=' * 60)

    def print_result(self, result: dict):
        """Print grading results."""
        print('-' * 40)
        print('CORRECT!' if result['correct'] else 'WRONG')
        print(f"Answer: {result['correct_name']} / {result['correct_price']:,.0f} yen")
        print(f"You:    {result['answered_name']} / {result['answered_price']:,.0f} yen")
        print(f"Name: {'ok' if result['name_ok'] else 'x'}  Price: {'ok' if result['price_ok'] else 'x'}")
        print(f"Score: {result['summary_display']}")
        print('-' * 40)

    def print_status(self, status: dict):
        """Print score summary and settings."""
        print('\n' + '=' * 50)
        print(f"STATUS ({status['user']})")
        print('=' * 50)
        print(f"Answered: {status['total']}  Correct: {status['correct']}  Rate: {status['rate']}%")
        print(f"Tolerance: +/-{status['tolerance_pct']}%  Strict names: {status['strict_name']}")
        print(f"Grade filter: {status['grade_filter']}  Pool: {status['pool_size']}/{status['card_count']} cards")
        if status['recent']:
            print(f"\nRecent ({len(status['recent'])}):")
            for r in status['recent']:
                self.print_history_line(r)
        print('=' * 50 + '\n')

    def print_history_line(self, r: dict):
        mark = 'o' if r['correct'] else 'x'
        print(f"  [{mark}] {r['correct_name']} / {r['correct_price']:,.0f} -> "
              f"{r['answered_name']} / {r['answered_price']:,.0f}")

    def print_history(self, history: dict):
        print(f"\nHistory for {history['user']} ({history['total']} shown):")
        for r in history['results']:
            self.print_history_line(r)
        print()

    def run(self):
        """Run the main quiz loop."""
        try:
            health = self.client.health_check()
            print(f"Connected to cardquiz server ({health['service']})")
        except requests.RequestException:
            print(f"Error: Cannot connect to server at {self.client.base_url}")
            print("Make sure the server is running: python run_server.py")
            return

        status = self.client.get_status()
        print(f"Player {status['user']}: {status['summary_display']}")
        print('Enter the card name, then the price.')
        print('Commands: "next" to skip, "status", "history", "exit" to quit\n')

        while True:
            try:
                question = self.client.next_question()
            except requests.HTTPError as e:
                print(f"Error: {self.client.error_detail(e)}")
                return

            self.print_question(question)
            # Rejected answers (400) are asked again for the same card
            while True:
                answer = self.prompt_answer()
                if answer is None:
                    print('Goodbye!')
                    return
                if answer is False:
                    break

                name, price = answer
                try:
                    result = self.client.submit_answer(name, price)
                except requests.HTTPError as e:
                    print(f"Error: {self.client.error_detail(e)}")
                    if e.response is not None and e.response.status_code == 400:
                        continue
                    break
                self.print_result(result)
                break

    def prompt_answer(self):
        """Read name and price. Returns (name, price), False to skip, None to quit."""
        fields = []
        while len(fields) < 2:
            label = 'name ' if not fields else 'price'
            user_input = input(f'{label} ==> ').strip()
            command = user_input.lower()

            if command == 'exit':
                return None
            elif command == 'next':
                return False
            elif command == 'status':
                self.print_status(self.client.get_status())
            elif command == 'history':
                self.print_history(self.client.get_history())
            elif user_input == '':
                print('Please enter a value.')
            else:
                fields.append(user_input)
        return fields[0], fields[1]
